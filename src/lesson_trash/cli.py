"""
Lesson trash command line.

Lists the trash and restores, purges or trashes lessons against the store
selected by LESSON_STORE_BACKEND.

Usage:
    lesson-trash list
    lesson-trash trash LESSON_ID
    lesson-trash restore LESSON_ID
    lesson-trash purge LESSON_ID [--yes]

Examples:
    # Show deleted lessons from the local snapshot file
    LESSON_STORE_PATH=data/lessons.json lesson-trash list

    # Restore a lesson in the hosted database
    export LESSON_STORE_BACKEND=supabase
    export SUPABASE_URL="https://your-project.supabase.co"
    export SUPABASE_KEY="your_key"
    lesson-trash restore 6f1c2a90-...

    # Permanently delete without the confirmation prompt
    lesson-trash purge 6f1c2a90-... --yes
"""

import argparse
import logging
import sys
from typing import List, Optional

from .lifecycle.display import render_trash_text
from .lifecycle.manager import LessonLifecycleManager
from .models.result import Result
from .store.interfaces import LessonStore
from .utils.config import Config
from .utils.di_container import DIContainer, configure_default_services
from .validation.lesson_validator import InvalidLessonIdError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="lesson-trash",
        description="Manage deleted lessons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides LOG_LEVEL)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="Show lessons in the trash")

    trash = commands.add_parser("trash", help="Move a lesson to the trash")
    trash.add_argument("lesson_id", help="Lesson identifier")

    restore = commands.add_parser("restore", help="Put a deleted lesson back on the calendar")
    restore.add_argument("lesson_id", help="Lesson identifier")

    purge = commands.add_parser("purge", help="Delete a lesson permanently")
    purge.add_argument("lesson_id", help="Lesson identifier")
    purge.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt"
    )

    return parser.parse_args(argv)


def confirm(description: str) -> bool:
    """
    Ask the operator to confirm an irreversible action.

    Returns:
        True if the operator confirms
    """
    response = input(f"Are you sure you want to {description}? (y/n): ").strip().lower()
    return response in ['y', 'yes']


def report(result: Result, success_text: str) -> int:
    """Print the outcome of a store request and return the exit status."""
    if result.is_failure:
        print(f"ERROR: {result.message}")
        return 1

    print(f"✓ {result.message or success_text}")
    return 0


def run_command(args: argparse.Namespace, manager: LessonLifecycleManager) -> int:
    """Execute one subcommand against the manager's store."""
    store = manager.store
    logger = logging.getLogger(__name__)

    if args.command == "list":
        refreshed = manager.refresh()
        if refreshed.is_failure:
            print(f"ERROR: {refreshed.message}")
            return 1
        print(render_trash_text(refreshed.value))
        return 0

    if args.command == "trash":
        return report(manager.move_to_trash(args.lesson_id), "Moved to trash")

    lessons = store.fetch_lessons()
    students = store.fetch_students()
    for fetched in (lessons, students):
        if fetched.is_failure:
            print(f"ERROR: {fetched.message}")
            return 1

    if args.command == "restore":
        instructors = store.fetch_instructors()
        if instructors.is_failure:
            print(f"ERROR: {instructors.message}")
            return 1
        result = manager.restore(
            args.lesson_id,
            lessons=lessons.value,
            students=students.value,
            instructors=instructors.value
        )
        return report(result, "Restored")

    description = manager.describe_purge(args.lesson_id, lessons.value, students.value)
    if not args.yes and not confirm(description or f"permanently delete lesson {args.lesson_id}"):
        logger.info(f"Purge of lesson {args.lesson_id} cancelled by operator")
        print("Cancelled")
        return 1

    return report(manager.purge(args.lesson_id), "Deleted permanently")


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)

    config = Config()
    try:
        config.validate()
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    container = DIContainer()
    configure_default_services(container, config)

    logger = container.resolve(logging.Logger)
    if args.log_level:
        logger.setLevel(args.log_level)

    manager = container.resolve(LessonLifecycleManager)
    store = container.resolve(LessonStore)

    try:
        return run_command(args, manager)
    except InvalidLessonIdError as e:
        logger.error(str(e))
        print(f"ERROR: {e}")
        return 1
    finally:
        close = getattr(store, "close", None)
        if close:
            close()


if __name__ == "__main__":
    sys.exit(main())
