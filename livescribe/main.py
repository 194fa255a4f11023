"""Main application entry point for Livescribe."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from aiohttp import web

from livescribe import __version__
from livescribe.server.app import create_app, ORCHESTRATOR_KEY
from livescribe.ui.console_monitor import TranscriptConsoleMonitor

from .config import LivescribeConfig

logger = logging.getLogger(__name__)


class Server:

    def __init__(self, config_path: Optional[str], log_level: Optional[str] = None):
        # Load configuration
        self.config = LivescribeConfig(config_path)
        # Command line overrides config
        if log_level:
            self.config.set('logging.level', log_level)
        setup_logging(self.config, self.config.get('logging.level', 'INFO'))
        self.monitor: Optional[TranscriptConsoleMonitor] = None

    def init(self, channels: List[str], political_only: bool = False, monitor: bool = False) -> web.Application:
        logger.info("Initializing services...")
        self.app = create_app(self.config, startup_channels=channels, political_only=political_only)

        if monitor:
            publisher = self.app[ORCHESTRATOR_KEY].publisher
            self.monitor = TranscriptConsoleMonitor(publisher.transcript_topic, publisher.error_topic)
        return self.app

    def run(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        host = host or self.config.get('server.host', '0.0.0.0')
        port = port or self.config.get_port()
        ws_path = self.config.get('server.websocket_path', '/transcription')

        logger.info("=" * 40)
        logger.info(f"Transcription Server - Port {port}")
        logger.info(f"Health: http://{host}:{port}/health")
        logger.info(f"WebSocket: ws://{host}:{port}{ws_path}")
        logger.info("=" * 40)
        try:
            web.run_app(self.app, host=host, port=port, print=None)
        finally:
            self.cleanup()

    def cleanup(self):
        if self.monitor:
            self.monitor.shutdown()
            self.monitor = None


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'logs/livescribe.log')
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("Livescribe transcription server starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Livescribe - live stream transcription and translation server"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: livescribe.yaml in the current directory)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, INFO)"
    )

    parser.add_argument("--host", type=str, help="Interface to bind (overrides config)")
    parser.add_argument("--port", type=int, help="Port to listen on (overrides PORT and config)")

    parser.add_argument(
        "--channel",
        action="append",
        default=[],
        metavar="ID",
        help="Start transcribing this channel (UC... id or @handle) at startup; repeatable"
    )

    parser.add_argument(
        "--political-only",
        action="store_true",
        help="Only publish transcripts of startup channels that mention BJP or TMC"
    )

    parser.add_argument(
        "--monitor",
        action="store_true",
        help="Print published transcripts to the console"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Livescribe v{__version__}"
    )
    return parser


def main() -> None:
    """Main entry point for Livescribe."""
    args = build_parser().parse_args()

    try:
        server = Server(args.config, args.log_level)
        server.init(args.channel, political_only=args.political_only, monitor=args.monitor)
        server.run(host=args.host, port=args.port)
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
