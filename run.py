#!/usr/bin/env python3
"""Simple runner script for the Instagram media extractor API."""

import sys

def main():
    # Defaults
    host = "0.0.0.0"
    port = 3000
    log_level = "INFO"

    # Parse simple args
    args = sys.argv[1:]
    if "--help" in args or "-h" in args:
        print("""
Instagram Media Extractor - public post/reel/video media URL API

Usage:
    python run.py [options]

Options:
    --host HOST     Bind address (default: 0.0.0.0)
    --port PORT     Server port (default: 3000)
    --log LEVEL     Log level (default: INFO)
    -h, --help      Show this help

Examples:
    python run.py
    python run.py --port 8080 --log DEBUG
""")
        return

    for i, arg in enumerate(args):
        if arg == "--host" and i + 1 < len(args):
            host = args[i + 1]
        elif arg == "--port" and i + 1 < len(args):
            port = int(args[i + 1])
        elif arg == "--log" and i + 1 < len(args):
            log_level = args[i + 1].upper()

    try:
        from ig_media.api import run_server
        from ig_media.config import AppConfig, ServerConfig
        from ig_media.main import setup_logging
    except ImportError as e:
        print(f"Module import failed: {e}")
        print("\nInstall with:")
        print("  pip install -e .")
        sys.exit(1)

    setup_logging(log_level)
    print(f"""
Instagram Media Extractor API
  Health check:      http://localhost:{port}/health
  Download endpoint: POST http://localhost:{port}/instagram/download
""")
    run_server(AppConfig(server=ServerConfig(host=host, port=port), log_level=log_level))

if __name__ == "__main__":
    main()
