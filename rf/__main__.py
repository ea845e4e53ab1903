from rf.cli.app import main

main()
