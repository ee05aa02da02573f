#!/usr/bin/env python3
"""
sealgate_verify.py - Offline CLI for SealGate signatures and field encryption

Runs the same transformations as the service without a server:
1. sign    - print the signature of a JSON object
2. verify  - check a signature against a JSON object
3. encrypt - depth-1 encrypt a JSON document
4. decrypt - depth-1 decrypt a JSON document

The signing key comes from --key or $SEALGATE_SECRET_KEY.

Exit codes:
  0 - Success / valid signature
  3 - Signature verification failed
  10 - Input error (missing file, invalid JSON, wrong shape)
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, List, Optional

from sealgate.app.config import DEFAULT_SECRET_KEY
from sealgate.app.services.codec import loads_strict
from sealgate.app.services.signer import HmacSigner
from sealgate.app.services.transform import decrypt_payload, encrypt_payload

EXIT_OK = 0
EXIT_SIGNATURE_INVALID = 3
EXIT_INPUT_ERROR = 10


class InputError(Exception):
    """Raised when an input document cannot be used."""


def load_document(path: str) -> Any:
    """Load a JSON document from a file ("-" reads stdin)."""
    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
    except FileNotFoundError:
        raise InputError(f"File not found: {path}")

    try:
        return loads_strict(text)
    except ValueError as e:
        raise InputError(f"Invalid JSON in {path}: {e}")


def resolve_key(key: Optional[str]) -> bytes:
    """Pick the signing key from the CLI flag, the environment or the default."""
    value = key or os.environ.get("SEALGATE_SECRET_KEY") or DEFAULT_SECRET_KEY
    return value.encode('utf-8')


def verify_document(
    document: Any,
    signer: HmacSigner,
    signature: Optional[str] = None
) -> Dict[str, Any]:
    """
    Verify a signature over a document.

    Args:
        document: Either the signed object itself (with signature given),
            or an envelope {"signature": ..., "data": {...}}
        signer: Signer holding the shared key
        signature: Signature to check against document

    Returns:
        Dictionary with valid (bool) and failures (list)
    """
    if signature is None:
        if not isinstance(document, dict):
            raise InputError("Envelope must be a JSON object")
        signature = document.get("signature")
        document = document.get("data")
        if not isinstance(signature, str):
            raise InputError("Envelope is missing a string 'signature'")

    if not isinstance(document, dict):
        raise InputError("Signed data must be a JSON object")

    if signer.verify(document, signature):
        return {"valid": True, "failures": []}
    return {"valid": False, "failures": ["Signature does not match data"]}


def print_human_summary(result: Dict[str, Any]) -> None:
    """Print human-readable verification summary."""
    print("\n" + "=" * 70)
    print("SEALGATE SIGNATURE VERIFICATION")
    print("=" * 70)

    if result["valid"]:
        print("✓ VALID - Signature verified successfully")
    else:
        print("✗ INVALID - Verification failed")
        print("\nFailures:")
        for failure in result["failures"]:
            print(f"  • {failure}")

    print("=" * 70 + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sign, verify, encrypt and decrypt JSON documents offline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  - Success / signature valid
  3  - Signature verification failed
  10 - Input error

Examples:
  # Sign an object
  ./sealgate_verify.py sign data.json --key my-secret

  # Verify an envelope {"signature": ..., "data": {...}}
  ./sealgate_verify.py verify envelope.json --json

  # Verify a bare object against a signature
  ./sealgate_verify.py verify data.json --signature 3b6f...
        """
    )
    parser.add_argument("--key", help="Shared secret (default: $SEALGATE_SECRET_KEY)")

    sub = parser.add_subparsers(dest="command", required=True)

    sign_p = sub.add_parser("sign", help="Print the signature of a JSON object")
    sign_p.add_argument("file", help="Path to JSON object file ('-' for stdin)")

    verify_p = sub.add_parser("verify", help="Verify a signature")
    verify_p.add_argument("file", help="Path to envelope or object file ('-' for stdin)")
    verify_p.add_argument("--signature", help="Hex signature (if file holds the bare object)")
    verify_p.add_argument("--json", action="store_true",
                          help="Output results as JSON instead of human-readable")

    for name, help_text in (("encrypt", "Encrypt top-level values"),
                            ("decrypt", "Decrypt top-level values")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", help="Path to JSON document ('-' for stdin)")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        document = load_document(args.file)

        if args.command == "encrypt":
            print(json.dumps(encrypt_payload(document), ensure_ascii=False))
            sys.exit(EXIT_OK)

        if args.command == "decrypt":
            print(json.dumps(decrypt_payload(document), ensure_ascii=False))
            sys.exit(EXIT_OK)

        signer = HmacSigner(resolve_key(args.key))

        if args.command == "sign":
            if not isinstance(document, dict):
                raise InputError("Only JSON objects can be signed")
            print(json.dumps({"signature": signer.sign(document)}))
            sys.exit(EXIT_OK)

        result = verify_document(document, signer, args.signature)

    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print_human_summary(result)

    sys.exit(EXIT_OK if result["valid"] else EXIT_SIGNATURE_INVALID)


if __name__ == "__main__":
    main()
