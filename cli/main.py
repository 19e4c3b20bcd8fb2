"""
CLI for the student token roster.

Commands:
  shell                         Interactive session (login + menu loop).
  list                          Print all students.
  find   FIRST LAST             Print one student.
  add    FIRST LAST [--tokens N]      (teacher)
  remove FIRST LAST                   (teacher)
  expel  FIRST LAST                   (teacher)
  adjust FIRST LAST DELTA             (teacher)
  audit                         Print the audit log.
  serve  [--host H --port P]    Run the HTTP API (dev server).

Mutating commands take the acting user via --as-first/--as-last/--role.
Store paths come from STUDENTS_CSV_PATH / AUDIT_LOG_PATH unless
--students-file / --audit-file are given.

Exit codes: 0 ok, 1 roster or storage error, 2 configuration error, 130 Ctrl-C.

Usage:
  python -m cli shell
  python -m cli adjust Bob Lee -5 --as-first Ann --as-last Roe --role teacher
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, Optional

from app.config import load_settings
from app.container import Container
from app.logging_setup import configure_logging
from service.errors import ConfigurationError, DomainError, StorageError
from service.models import Student, User
from service import validators

logger = logging.getLogger("CLI")

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

MENU = (
    "\nAvailable actions:\n"
    "1. View all students\n"
    "2. Update tokens\n"
    "3. Add new student\n"
    "4. Remove student\n"
    "5. Exit"
)


def _make_container(args: argparse.Namespace) -> Container:
    override = {}
    if getattr(args, "students_file", None):
        override["STUDENTS_CSV_PATH"] = args.students_file
    if getattr(args, "audit_file", None):
        override["AUDIT_LOG_PATH"] = args.audit_file
    settings = load_settings(override)
    configure_logging(settings)
    return Container(settings)


def _actor(args: argparse.Namespace) -> User:
    role = validators.parse_role(args.role)
    if role is None:
        raise argparse.ArgumentTypeError(f"invalid role: {args.role!r} (expected TEACHER or STUDENT)")
    return User(args.as_first, args.as_last, role)


def _fmt_student(s: Student) -> str:
    return f"{s.first_name} {s.last_name}: {s.tokens} tokens"


# ---------- interactive prompts ----------

def _ask_non_empty(prompt: str, input_fn: InputFn, out: OutputFn) -> str:
    while True:
        value = input_fn(prompt).strip()
        if value:
            return value
        out("Input cannot be empty. Please try again.")


def _ask_name(prompt: str, input_fn: InputFn, out: OutputFn) -> str:
    while True:
        value = _ask_non_empty(prompt, input_fn, out)
        if validators.is_valid_name(value):
            return value
        out("Invalid input. Only letters and hyphens are allowed.")


def _ask_int(prompt: str, input_fn: InputFn, out: OutputFn, lo: Optional[int] = None, hi: Optional[int] = None) -> int:
    while True:
        raw = input_fn(prompt)
        n = validators.parse_int(raw)
        if n is None:
            out("Invalid input. Please enter a valid number.")
            continue
        if (lo is not None and n < lo) or (hi is not None and n > hi):
            out(f"Input must be between {lo} and {hi}. Please try again.")
            continue
        return n


def _login(input_fn: InputFn, out: OutputFn) -> User:
    first = _ask_name("Enter your first name: ", input_fn, out)
    last = _ask_name("Enter your last name: ", input_fn, out)
    while True:
        role = validators.parse_role(_ask_non_empty("Enter your role (TEACHER/STUDENT): ", input_fn, out))
        if role is not None:
            return User(first, last, role)
        out("Invalid role. Please enter either TEACHER or STUDENT.")


def run_shell(container: Container, input_fn: InputFn = input, out: OutputFn = print) -> int:
    directory = container.students
    out("Welcome to Student Management System")
    try:
        user = _login(input_fn, out)
        logger.info("Session started for %s (%s)", user.display_name, user.role.value)
        while True:
            out(MENU)
            choice = _ask_int("Choose action (1-5): ", input_fn, out, 1, 5)
            try:
                if choice == 1:
                    out("\nCurrent students:")
                    for s in directory.list_all():
                        out(_fmt_student(s))
                elif choice == 2:
                    first = _ask_name("Enter student's first name: ", input_fn, out)
                    last = _ask_name("Enter student's last name: ", input_fn, out)
                    amount = _ask_int("Enter token amount to add/subtract: ", input_fn, out)
                    directory.adjust_tokens(first, last, amount, user)
                    out("Tokens updated successfully.")
                elif choice == 3:
                    first = _ask_name("Enter new student's first name: ", input_fn, out)
                    last = _ask_name("Enter new student's last name: ", input_fn, out)
                    directory.add(user, Student(first, last, 0))
                    out("Student added successfully.")
                elif choice == 4:
                    first = _ask_name("Enter student's first name to remove: ", input_fn, out)
                    last = _ask_name("Enter student's last name to remove: ", input_fn, out)
                    directory.remove(first, last, user)
                    out("Student removed successfully.")
                else:
                    out("Goodbye!")
                    return 0
            except DomainError as e:
                out(f"Error: {e}")
            except StorageError as e:
                logger.error("Operation failed: %s", e)
                out(f"Unexpected error: {e}")
    except EOFError:
        out("Goodbye!")
        return 0


# ---------- commands ----------

def cmd_shell(args: argparse.Namespace) -> int:
    return run_shell(_make_container(args))


def cmd_list(args: argparse.Namespace) -> int:
    for s in _make_container(args).students.list_all():
        print(_fmt_student(s))
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    s = _make_container(args).students.find_by_name(args.first, args.last)
    if s is None:
        print(f"Student not found: {args.first} {args.last}")
        return 1
    print(_fmt_student(s))
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    c = _make_container(args)
    s = c.students.add(_actor(args), Student(args.first, args.last, args.tokens))
    print(f"Added {_fmt_student(s)}")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    _make_container(args).students.remove(args.first, args.last, _actor(args))
    print(f"Removed {args.first} {args.last}")
    return 0


def cmd_expel(args: argparse.Namespace) -> int:
    _make_container(args).students.expel(_actor(args), args.first, args.last)
    print(f"Expelled {args.first} {args.last}")
    return 0


def cmd_adjust(args: argparse.Namespace) -> int:
    s = _make_container(args).students.adjust_tokens(args.first, args.last, args.delta, _actor(args))
    print(_fmt_student(s))
    return 0


def cmd_audit(args: argparse.Namespace) -> int:
    for e in _make_container(args).audit.list_all():
        d = e.to_dict()
        print(f"{d['timestamp']} {e.action} {e.user_first_name} {e.user_last_name} ({d['userRole']}) {e.details}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from app import create_app

    override = {}
    if args.students_file:
        override["STUDENTS_CSV_PATH"] = args.students_file
    if args.audit_file:
        override["AUDIT_LOG_PATH"] = args.audit_file
    create_app(override).run(host=args.host, port=args.port)
    return 0


def _add_actor_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--as-first", required=True, help="Acting user's first name")
    sp.add_argument("--as-last", required=True, help="Acting user's last name")
    sp.add_argument("--role", required=True, help="TEACHER or STUDENT")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="roster",
        description="Student token roster"
    )
    p.add_argument("--students-file", help="Override STUDENTS_CSV_PATH")
    p.add_argument("--audit-file", help="Override AUDIT_LOG_PATH")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("shell", help="Interactive session")
    sp.set_defaults(func=cmd_shell)

    sp = sub.add_parser("list", help="List all students")
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("find", help="Show one student")
    sp.add_argument("first")
    sp.add_argument("last")
    sp.set_defaults(func=cmd_find)

    sp = sub.add_parser("add", help="Add a student (teacher)")
    sp.add_argument("first")
    sp.add_argument("last")
    sp.add_argument("--tokens", type=int, default=0)
    _add_actor_args(sp)
    sp.set_defaults(func=cmd_add)

    sp = sub.add_parser("remove", help="Remove a student (teacher)")
    sp.add_argument("first")
    sp.add_argument("last")
    _add_actor_args(sp)
    sp.set_defaults(func=cmd_remove)

    sp = sub.add_parser("expel", help="Expel a student (teacher)")
    sp.add_argument("first")
    sp.add_argument("last")
    _add_actor_args(sp)
    sp.set_defaults(func=cmd_expel)

    sp = sub.add_parser("adjust", help="Add/subtract tokens (teacher)")
    sp.add_argument("first")
    sp.add_argument("last")
    sp.add_argument("delta", type=int)
    _add_actor_args(sp)
    sp.set_defaults(func=cmd_adjust)

    sp = sub.add_parser("audit", help="Print the audit log")
    sp.set_defaults(func=cmd_audit)

    sp = sub.add_parser("serve", help="Run the HTTP API (dev server)")
    sp.add_argument("--host", default="127.0.0.1")
    sp.add_argument("--port", type=int, default=10000)
    sp.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        return 130
    except ConfigurationError as e:
        logger.error("Initialization failed: %s", e)
        print(f"CONFIG ERROR: {e}", file=sys.stderr)
        return 2
    except (DomainError, StorageError, argparse.ArgumentTypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
