"""Command-line interface for tokenveil."""

import sys
import logging
import argparse
import asyncio
import binascii
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

from tokenveil import __version__
from tokenveil.codec.base32 import encode_base32, decode_base32
from tokenveil.codec.xor import InvalidKeyError
from tokenveil.config.loader import (
    load_config,
    apply_env_overrides,
    get_config_value,
    ConfigError,
    DEFAULT_CONFIG_NAME,
)
from tokenveil.config.validator import validate_config, ValidationError
from tokenveil.config.keys import resolve_key
from tokenveil.protocol.obfuscator import Obfuscator
from tokenveil.ui.inspect_view import render_inspect
from tokenveil.web.query import get_query_param

DEFAULT_QUERY_PARAM = 'token'

# Commands that only touch the base32 codec and need no key
CODEC_COMMANDS = ('encode', 'decode')


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='tokenveil',
        description='Reversible obfuscation for short client-visible tokens',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Obfuscate a value with the key from ./tokenveil.yaml
  tokenveil obfuscate user-42

  # Several tokens for the same value (each uses a fresh IV)
  tokenveil obfuscate user-42 --count 5

  # Recover a value with an explicit key
  tokenveil --key site-key deobfuscate KQMZ2VQ

  # Pull the token out of a link (parameter names are case-insensitive)
  tokenveil from-url "https://example.com/view?Token=KQMZ2VQ"

  # Show every intermediate value of a token
  tokenveil inspect KQMZ2VQ

  # Raw base32 codec
  tokenveil encode 0000000000
  tokenveil decode AAAAAAAA

NOTE: tokens are obfuscated, not encrypted.
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help=f'Path to config file (default: ./{DEFAULT_CONFIG_NAME})'
    )

    parser.add_argument(
        '--key',
        metavar='KEY',
        help='Obfuscation key. Overrides config and TOKENVEIL_KEY.'
    )

    parser.add_argument(
        '--key-encoding',
        choices=['utf-8', 'hex', 'base32'],
        help='How --key / obfuscation.key is written (default: utf-8)'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    obf = subparsers.add_parser('obfuscate', help='Obfuscate a text value')
    obf.add_argument('text', help='Text to obfuscate')
    obf.add_argument(
        '--count',
        type=int,
        default=1,
        metavar='N',
        help='Number of tokens to generate (default: 1)'
    )

    deobf = subparsers.add_parser('deobfuscate', help='Recover the text from a token')
    deobf.add_argument('token', help='Obfuscated token')

    inspect = subparsers.add_parser('inspect', help='Show the intermediate values of a token')
    inspect.add_argument('token', help='Obfuscated token')

    from_url = subparsers.add_parser('from-url', help='Deobfuscate a token taken from a URL query string')
    from_url.add_argument('url', help='URL or raw query string')
    from_url.add_argument(
        '--param',
        metavar='NAME',
        help=f'Query parameter holding the token (default: obfuscation.query_param or "{DEFAULT_QUERY_PARAM}")'
    )

    encode = subparsers.add_parser('encode', help='Base32-encode hex bytes')
    encode.add_argument('hex', help='Bytes as hex (e.g. 00ff10)')

    decode = subparsers.add_parser('decode', help='Base32-decode text to hex bytes')
    decode.add_argument('text', help='Base32 text')

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging') or {}

    level_str = str(logging_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except (OSError, PermissionError) as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def _load_cli_config(args: argparse.Namespace) -> dict:
    """
    Load config for a command, tolerating a missing default file.

    A config file is optional when the key comes from --key or
    TOKENVEIL_KEY, and for the raw codec commands. An explicit --config
    must always exist.
    """
    if args.config is None and not (Path.cwd() / DEFAULT_CONFIG_NAME).exists():
        config = apply_env_overrides({})
        key_available = args.key or get_config_value(config, 'obfuscation.key')
        if not key_available and args.command not in CODEC_COMMANDS:
            raise ConfigError(
                f"No {DEFAULT_CONFIG_NAME} found and no key given.\n"
                f"Pass --key, set TOKENVEIL_KEY or create {DEFAULT_CONFIG_NAME}."
            )
        return config

    return load_config(args.config)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for tokenveil CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_cli_config(args)

        # Apply CLI overrides
        if args.key or args.key_encoding:
            section = config.get('obfuscation')
            if not isinstance(section, dict):
                section = {}
                config['obfuscation'] = section
            if args.key:
                section['key'] = args.key
                # A configured encoding describes the configured key only
                section['key_encoding'] = args.key_encoding or 'utf-8'
            elif args.key_encoding:
                section['key_encoding'] = args.key_encoding

        validate_config(config, require_key=args.command not in CODEC_COMMANDS)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    try:
        return asyncio.run(run_command(config, args))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except InvalidKeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 130


async def run_command(config: dict, args: argparse.Namespace) -> int:
    """
    Run the selected command (async).

    Args:
        config: Validated configuration
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    if args.command == 'encode':
        try:
            data = binascii.unhexlify(args.hex.strip())
        except (binascii.Error, ValueError) as e:
            print(f"Error: invalid hex input: {e}", file=sys.stderr)
            return 2
        print(encode_base32(data))
        return 0

    if args.command == 'decode':
        print(decode_base32(args.text).hex())
        return 0

    obfuscator = Obfuscator(resolve_key(config))

    if args.command == 'obfuscate':
        if args.count < 1:
            print("Error: --count must be at least 1", file=sys.stderr)
            return 2
        for _ in range(args.count):
            print(await obfuscator.obfuscate(args.text))
        logger.debug(f"Generated {args.count} token(s)")
        return 0

    if args.command == 'deobfuscate':
        print(await obfuscator.deobfuscate(args.token))
        return 0

    if args.command == 'inspect':
        render_inspect(await obfuscator.inspect(args.token))
        return 0

    if args.command == 'from-url':
        param = args.param or get_config_value(
            config, 'obfuscation.query_param', DEFAULT_QUERY_PARAM
        )
        token = get_query_param(args.url, param)
        if token is None:
            print(f"Error: query parameter '{param}' not found", file=sys.stderr)
            return 1
        print(await obfuscator.deobfuscate(token))
        return 0

    print(f"Error: unknown command {args.command}", file=sys.stderr)
    return 2


if __name__ == '__main__':
    sys.exit(main())
