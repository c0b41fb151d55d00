# Copyright 2026 ProtoIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed Document artifacts.

Artifacts are compact JSON strings so that a parsed schema can be handed to
a consumer in another process. The format is versioned so future schema
changes can be detected.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from protoidl.model.entities import Document

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


class ArtifactError(Exception):
    """Raised when an artifact cannot be decoded into a Document."""


def serialize(document: Document) -> str:
    """Serialize a Document to a compact JSON string."""
    payload = {"v": ARTIFACT_FORMAT_VERSION, "document": document.model_dump(mode="json")}
    return json.dumps(payload, separators=(",", ":"))


def deserialize(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Document`.

    Raises:
        ArtifactError: If the data is not JSON, the format version is not
            recognised, or the payload does not describe a valid Document.
    """
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ArtifactError(f"Artifact is not valid JSON: {exc}") from exc

    if not isinstance(obj, dict):
        raise ArtifactError("Artifact must be a JSON object")

    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ArtifactError(f"Unsupported artifact format version: {version!r}")

    if "document" not in obj:
        raise ArtifactError("Artifact has no 'document' payload")

    try:
        return Document.model_validate(obj["document"])
    except ValidationError as exc:
        raise ArtifactError(f"Invalid artifact payload: {exc}") from exc
