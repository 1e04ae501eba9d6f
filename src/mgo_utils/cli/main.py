"""
Entry point for the mgo utilities (`mgo-utils` console script).
"""

from .argparse_config import parse_args
from .cli import UtilsCLI
from .commands import CommandHandler
from mgo_utils.core.logger import init_logger


def run_interactive(cli: UtilsCLI, handler: CommandHandler):
    """Run the interactive CLI loop."""
    while True:
        cli.display_menu()
        choice = cli.prompt("Enter choice")
        if choice == "1":
            command = cli.prompt("Enter command")
            if not command:
                handler.logger.error("No command given")
                continue
            shell = cli.prompt_yes_no("Run through the shell")
            results = handler.handle_run(command, shell=shell)
            cli.display_results(results)
        elif choice == "2":
            source = cli.prompt("Enter source directory")
            destination = cli.prompt("Enter destination directory")
            crush = cli.prompt_yes_no("Overwrite an existing destination")
            results = handler.handle_copy(source, destination, crush=crush)
            cli.display_results(results)
        elif choice == "3":
            text = cli.prompt("Enter text")
            cli.display_results(handler.handle_md5(text))
        elif choice in ("4", ""):
            handler.logger.info("Exiting...")
            break
        else:
            handler.logger.error("Invalid choice")


def main():
    """Main function to run the application."""
    args = parse_args()
    logger = init_logger(timing=True if args is not None and args.timing else None)
    handler = CommandHandler(logger=logger)
    cli = UtilsCLI(handler)

    if args is None:
        run_interactive(cli, handler)
        return

    if args.run is not None:
        results = handler.handle_run(args.run, shell=args.shell, display=args.display, use_log=args.log)
    elif args.copy is not None:
        results = handler.handle_copy(args.copy[0], args.copy[1], crush=args.crush)
    elif args.md5 is not None:
        results = handler.handle_md5(args.md5)
    elif args.exists is not None:
        results = handler.handle_exists(args.exists)
    else:
        results = []
    cli.display_results(results)
