import argparse
import logging
import signal
import sys
import time
from typing import Optional, Sequence

from app_config import AppConfig, AppConfigurationError, load_app_config, log_level
from control import ControlClient, ControlConfig, ControlConfigurationError
from control.cli import build_parser, run_command
from idle import IdleConfigurationError
from runtime import ControlPlane, ControlPlaneBootstrap
from server import ServerConfigurationError, UIServer, UIServerConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro")


def build_ui_server(app_config: AppConfig, logger: logging.Logger) -> Optional[UIServer]:
    try:
        config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error(f"UI server configuration error: {error}")
        logger.warning("Continuing without UI server.")
        return None

    if not config.enabled:
        logger.info("UI server disabled via ui_server.enabled=false")
        return None

    return UIServer(config=config, logger=logging.getLogger("ui_server"))


def run_app(args: argparse.Namespace) -> int:
    """Run the control plane until SIGINT or SIGTERM."""
    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        app_config = load_app_config(args.config)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    if not args.verbose:
        logging.getLogger().setLevel(log_level(app_config.logging))
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config file found, using defaults")

    try:
        control_plane = ControlPlane(
            ControlPlaneBootstrap(
                logger=logger,
                app_config=app_config,
                ui_server=build_ui_server(app_config, logger),
            )
        )
    except (ControlConfigurationError, IdleConfigurationError) as error:
        logger.error(f"Configuration error: {error}")
        return 1

    shutdown = False

    def handle_signal(signum, frame) -> None:
        del frame
        nonlocal shutdown
        logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
        shutdown = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        control_plane.start()
        logger.info("Press Ctrl+C to stop.")
        while not shutdown:
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
    finally:
        control_plane.stop()

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the application, or forward a command to the running instance."""
    args = build_parser().parse_args(argv)

    if args.command is None:
        return run_app(args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    try:
        app_config = load_app_config(args.config)
        control_config = ControlConfig.from_settings(app_config.control)
    except (AppConfigurationError, ControlConfigurationError) as error:
        print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    client = ControlClient(control_config, logger=logging.getLogger("control.client"))
    return run_command(args, client=client)


if __name__ == "__main__":
    raise SystemExit(main())
