import sys
import argparse
from typing import Any, Dict, Optional, Sequence

from codec import (decode_point, decode_public_key, decode_scalar, encode_int,
                   encode_point, encode_scalar)
from config import load_config, configure_logging, audit_log, get_current_user
from constants import SHARE_A_HOLDER, SHARE_B_HOLDER
from errors import MPDHError
from exchange import send
from keysplit import split_key
from recovery import recover
from storage import check_distinct, read_bytes, read_text, write_all

# --------------------------
# CLI Commands
# --------------------------
def cmd_generate(args: argparse.Namespace, cfg: Dict[str, Any]) -> None:
    """Split a fresh private key into two shares and write the public key"""
    keys = split_key(cfg["curve"])

    write_all([
        (args.pubkey_file, encode_point(keys.public_key)),
        (args.chuck_share_file, encode_scalar(keys.share_b).encode("ascii")),
        (args.alice_share_file, encode_scalar(keys.share_a).encode("ascii")),
    ])

    audit_log(cfg, f"GENERATE by {get_current_user()} pubkey={args.pubkey_file}")
    print("Key generation complete.")
    print(f"  Public key: {args.pubkey_file}")
    print(f"  {SHARE_B_HOLDER}'s share: {args.chuck_share_file}")
    print(f"  {SHARE_A_HOLDER}'s share: {args.alice_share_file}")

def cmd_send(args: argparse.Namespace, cfg: Dict[str, Any]) -> None:
    """Run an ephemeral exchange against a public key"""
    curve = cfg["curve"]
    check_distinct(args.pubkey_file, args.ephemeral_file)
    public_key = decode_public_key(read_bytes(args.pubkey_file), curve, args.pubkey_file)

    result = send(public_key, curve, verify=args.verify)

    write_all([(args.ephemeral_file, encode_point(result.ephemeral_public_key))])

    audit_log(cfg, f"SEND by {get_current_user()} pubkey={args.pubkey_file} ephemeral={args.ephemeral_file}")
    print(f"Sender Shared Secret (x-coord): {encode_int(result.shared_secret)}")

def cmd_recover(args: argparse.Namespace, cfg: Dict[str, Any]) -> None:
    """Recover the shared secret from both shares and verify it"""
    curve = cfg["curve"]
    check_distinct(args.ephemeral_file, args.chuck_share_file, args.alice_share_file, args.secret_file)
    ephemeral = decode_point(read_bytes(args.ephemeral_file), curve, args.ephemeral_file)
    share_b = decode_scalar(read_text(args.chuck_share_file), curve, args.chuck_share_file)
    share_a = decode_scalar(read_text(args.alice_share_file), curve, args.alice_share_file)

    result = recover(ephemeral, share_a, share_b, curve)
    print("Verification successful: Recovered secret matches direct computation.")

    secret_hex = encode_int(result.shared_secret)
    write_all([(args.secret_file, secret_hex.encode("ascii"))])

    audit_log(cfg, f"RECOVER by {get_current_user()} ephemeral={args.ephemeral_file} out={args.secret_file}")
    print(f"Recovered Shared Secret (x-coord): {secret_hex}")

COMMANDS = {
    "generate": cmd_generate,
    "send": cmd_send,
    "recover": cmd_recover,
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mp-dh",
        description="Two-party split-key Diffie-Hellman over NIST P-256",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="cmd", help="Available commands")

    # Generate command
    parser_generate = subparsers.add_parser("generate",
                                            help="Generate a public key and two private key shares")
    parser_generate.add_argument("pubkey_file", help="Output PEM public key")
    parser_generate.add_argument("chuck_share_file", help=f"Output hex share B ({SHARE_B_HOLDER})")
    parser_generate.add_argument("alice_share_file", help=f"Output hex share A ({SHARE_A_HOLDER})")

    # Send command
    parser_send = subparsers.add_parser("send",
                                        help="Derive a shared secret against a public key")
    parser_send.add_argument("pubkey_file", help="Input PEM public key")
    parser_send.add_argument("ephemeral_file", help="Output PEM ephemeral public key")
    parser_send.add_argument("--verify", action="store_true",
                             help="Cross-check the shared secret with the library ECDH")

    # Recover command
    parser_recover = subparsers.add_parser("recover",
                                           help="Recover the shared secret from both shares")
    parser_recover.add_argument("ephemeral_file", help="Input PEM ephemeral public key")
    parser_recover.add_argument("chuck_share_file", help=f"Input hex share B ({SHARE_B_HOLDER})")
    parser_recover.add_argument("alice_share_file", help=f"Input hex share A ({SHARE_A_HOLDER})")
    parser_recover.add_argument("secret_file", help="Output hex recovered secret")

    return parser

def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        sys.exit(1)

    try:
        cfg = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(cfg)

    try:
        COMMANDS[args.cmd](args, cfg)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user")
        sys.exit(130)
    except MPDHError as e:
        print(f"Error: {e}", file=sys.stderr)
        audit_log(cfg, f"{args.cmd.upper()}_FAILED by {get_current_user()} error={type(e).__name__}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
