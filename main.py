import logging
import os

from rich.logging import RichHandler
from rich.pretty import pprint

from optparser import *


def role(value):
    if value not in ("admin", "manager", "user"):
        raise BadArgumentError("role must be admin, manager, or user")
    return value


program = (
    Program("User Manager", "A program to manage user accounts")
    .add_command(["add", "a"], "Add a new user")
    .add_command(["delete", "d"], "Delete an existing user")
    .add_command(["list", "l"], "List all users")
    .add_term("username", "STRING", "Username of the user")
    .add_term("email", "EMAIL", "Email of the user")
    .add_flag(["v", "verbose"], "Enable verbose output")
    .add_flag(["q", "quiet"], "Suppress output")
    .add_param(["p", "password"], "STRING", "Password for the user")
    .add_param(["r", "role"], "STRING", "Role of the user", role)
    .add_param(["o", "output"], "OUTFILE", "Output file for the list command")
    .add_usage(["add", "username", "email", "password", "role"])
    .add_usage(["delete", "username"])
    .add_usage(["list", "output", "verbose"])
)


if __name__ == '__main__':
    if os.environ.get("OPTPARSER_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])
    pprint(program.parse())
