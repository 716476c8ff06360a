"""Keypair files and identity resolution for MiniSol."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from solders.keypair import Keypair
from solders.pubkey import Pubkey

logger = logging.getLogger(__name__)

DEFAULT_KEYPAIR_PATH = Path("my-keypair.json")
KEYPAIR_LENGTH = 64


class WalletError(RuntimeError):
    """Raised when keypair or identity operations fail."""


class IdentityReadError(WalletError):
    """Raised when an existing path cannot be decoded as a keypair."""


class InvalidPublicKeyError(WalletError):
    """Raised when a string is neither an existing path nor a valid public key."""


class KeypairWriteError(WalletError):
    """Raised when a keypair file cannot be written."""


def read_keypair_file(path: str | os.PathLike[str]) -> Keypair:
    """Load a keypair stored as a JSON array of 64 bytes."""
    keypair_path = Path(path)
    try:
        data = json.loads(keypair_path.read_text())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise IdentityReadError(f"Unable to read keypair file {keypair_path}: {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(item, int) and 0 <= item <= 255 for item in data):
        raise IdentityReadError(f"Keypair file {keypair_path} must contain a JSON array of bytes.")
    if len(data) != KEYPAIR_LENGTH:
        raise IdentityReadError(
            f"Keypair file {keypair_path} holds {len(data)} bytes; expected {KEYPAIR_LENGTH}."
        )

    try:
        keypair = Keypair.from_bytes(bytes(data))
    except Exception as exc:  # noqa: BLE001
        raise IdentityReadError(f"Keypair file {keypair_path} is not a valid keypair: {exc}") from exc
    logger.debug("Loaded keypair %s from %s", keypair.pubkey(), keypair_path)
    return keypair


def write_keypair_file(keypair: Keypair, path: str | os.PathLike[str]) -> Path:
    """Write `keypair` to `path`, replacing any existing file."""
    keypair_path = Path(path)
    payload = json.dumps(list(bytes(keypair)), separators=(",", ":"))
    try:
        keypair_path.write_text(payload)
    except OSError as exc:
        raise KeypairWriteError(f"Unable to write keypair file {keypair_path}: {exc}") from exc
    _set_permissions(keypair_path)
    logger.debug("Wrote keypair %s to %s", keypair.pubkey(), keypair_path)
    return keypair_path


def parse_public_key(value: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except Exception as exc:  # noqa: BLE001
        raise InvalidPublicKeyError(f"'{value}' is neither a keypair file nor a valid public key.") from exc


def resolve_identity(value: str) -> Pubkey:
    """Return the public key named by `value`.

    An existing filesystem path always wins: it is read as a keypair file and
    a read failure is fatal. Only when nothing exists at `value` is it parsed
    as a base-58 public key.
    """
    if value and os.path.exists(value):
        logger.debug("Resolving identity from keypair file %s", value)
        return read_keypair_file(value).pubkey()
    return parse_public_key(value)


def _set_permissions(path: Path) -> None:
    try:
        os.chmod(path, 0o600)
    except PermissionError:
        # Ignore on platforms without chmod support (e.g., Windows)
        pass


__all__ = [
    "DEFAULT_KEYPAIR_PATH",
    "WalletError",
    "IdentityReadError",
    "InvalidPublicKeyError",
    "KeypairWriteError",
    "read_keypair_file",
    "write_keypair_file",
    "parse_public_key",
    "resolve_identity",
]
