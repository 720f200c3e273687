"""Verification of secure_tap proofs by the external verification endpoint.

The proof is whatever the chip appended to the scanned URL (for example a
SUN message with its CMAC). This service does not understand it, it forwards
it and trusts the answer.
"""

import logging

import requests
from fastapi import Depends

from tagchip.config import Config, get_config
from tagchip.models.tag import Tag

logger = logging.getLogger(__name__)


class SecureTapVerifier:
    def __init__(self, config: Config = Depends(get_config)):
        self.config = config

    def verify(self, tag: Tag, proof: str | None) -> bool:
        """True only on an explicit positive answer, every failure rejects."""
        if not proof:
            return False
        if not self.config.secure_tap_verify_url:
            logger.warning(
                "secure_tap claim on tag %s rejected: no verification endpoint configured",
                tag.id,
            )
            return False
        try:
            response = requests.post(
                self.config.secure_tap_verify_url,
                json={
                    "public_id": tag.public_id,
                    "nfc_uid": tag.nfc_uid,
                    "proof": proof,
                },
                timeout=self.config.secure_tap_timeout,
            )
        except requests.RequestException as exc:
            logger.error("secure_tap verification request failed: %s", exc)
            return False
        if response.status_code != 200:
            logger.error(
                "secure_tap verification failed status=%s body=%s",
                response.status_code,
                response.text,
            )
            return False
        try:
            payload = response.json()
        except ValueError:
            logger.error("secure_tap verification returned non-JSON: %s", response.text)
            return False
        return isinstance(payload, dict) and payload.get("valid") is True
