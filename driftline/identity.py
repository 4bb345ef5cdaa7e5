"""Pseudonymous user identifiers derived from DIDs."""

import hashlib

UID_LENGTH = 12


def derive_uid_from_did(did: str, salt: str) -> str:
    """Derive a pseudonymous user ID from a DID.

    The same DID and salt always produce the same uid. Different salts (one
    per app view) produce unrelated uids for the same DID, so events from
    separately salted app views cannot be joined on the uid.

    Args:
        did: The user's DID (e.g. ``did:plc:...``).
        salt: App-specific salt. Keep it secret, e.g. in an env var.

    Returns:
        The first 12 characters of the lowercase hex SHA-256 of ``salt + did``.
    """
    digest = hashlib.sha256((salt + did).encode("utf-8")).hexdigest()
    return digest[:UID_LENGTH]
