"""CLI for inspecting the role matrix.

Usage:
    python -m erpadmin matrix [role]
    python -m erpadmin check <role> <permission>
    python -m erpadmin verify
"""

import sys
from typing import List, Optional

import yaml

from .core.config import get_settings
from .core.logger import configure_logging
from .core.rbac.checker import has_permission
from .core.rbac.roles import (
    ROLE_HIERARCHY,
    ROLE_PERMISSIONS,
    get_role_permissions,
    verify_role_hierarchy,
)

USAGE = """Usage: python -m erpadmin <command> [args]

Commands:
  matrix [role]              Print the role matrix (or one role) as YAML
  check <role> <permission>  Print granted/denied; exit 0 if granted
  verify                     Check the matrix invariants; exit 1 on violations
"""

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _usage() -> int:
    print(USAGE, file=sys.stderr, end="")
    return EXIT_USAGE


def matrix_as_dict(role: Optional[str] = None) -> dict:
    """Role matrix as plain data, permissions sorted, roles least privileged first.

    Raises:
        ValueError: If role is given and unknown
    """
    if role is not None:
        return {role: sorted(p.value for p in get_role_permissions(role))}
    return {
        r.value: sorted(p.value for p in ROLE_PERMISSIONS[r])
        for r in ROLE_HIERARCHY
    }


def cmd_matrix(args: List[str]) -> int:
    if len(args) > 1:
        return _usage()
    try:
        data = matrix_as_dict(args[0] if args else None)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED
    print(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), end="")
    return EXIT_OK


def cmd_check(args: List[str]) -> int:
    if len(args) != 2:
        return _usage()
    role, permission = args
    if has_permission(role, permission):
        print("granted")
        return EXIT_OK
    print("denied")
    return EXIT_FAILED


def cmd_verify(args: List[str]) -> int:
    if args:
        return _usage()
    problems = verify_role_hierarchy()
    for problem in problems:
        print(problem)
    if problems:
        return EXIT_FAILED
    print(f"OK: {len(ROLE_HIERARCHY)} roles, matrix consistent")
    return EXIT_OK


COMMANDS = {
    "matrix": cmd_matrix,
    "check": cmd_check,
    "verify": cmd_verify,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the policy CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        return _usage()

    configure_logging(get_settings())

    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    sys.exit(main())
