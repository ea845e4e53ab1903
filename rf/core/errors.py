"""Process exit codes.

Each failure kind exits with its own code so scripts driving `rf` can tell a
usage mistake from a failed command. Values are part of the CLI contract.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1  # step not allowed in the current state, unknown workflow
    CONFIG_ERROR = 2  # rf.toml missing or invalid
    DISCOVERY_ERROR = 3  # no manifest, or its version is not SemVer
    RULE_ERROR = 4  # bump rule cannot be applied
    EXTERNAL_ERROR = 5  # tracker, prompt, git or manifest write failed
    COMMAND_ERROR = 6  # templated command exited non-zero

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
