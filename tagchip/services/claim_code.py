"""Claim code store for `code` mode tags. Only SHA-256 hashes are persisted."""

import hashlib
import hmac
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from tagchip.errors.claim import ClaimCodeInvalidFormat, ClaimModeMismatch
from tagchip.models.tag import ClaimMode, Tag, TagCode
from tagchip.services.tag import TagService
from tagchip.uow import get_uow

logger = logging.getLogger(__name__)


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


class ClaimCodeService:
    def __init__(
        self,
        db: Session = Depends(get_uow),
        tag_service: TagService = Depends(),
    ):
        self.db = db
        self._tag_service = tag_service

    def set_code(self, tag_id: int, code: str) -> Tag:
        """Store (or replace) the code printed on the card shipped with the tag."""
        tag = self._tag_service.get(tag_id)
        if tag.claim_mode != ClaimMode.CODE:
            raise ClaimModeMismatch(f"tag {tag.id} is {tag.claim_mode.value}")
        code = (code or "").strip()
        if not 4 <= len(code) <= 128:
            raise ClaimCodeInvalidFormat
        stored = self.db.query(TagCode).filter(TagCode.tag_id == tag.id).first()
        if stored is None:
            stored = TagCode(tag_id=tag.id, code_hash=hash_code(code))
            self.db.add(stored)
        else:
            stored.code_hash = hash_code(code)
        self.db.flush()
        logger.info("Claim code set for tag %s", tag.id)
        return tag

    def verify(self, tag: Tag, code: str | None) -> bool:
        if not code:
            return False
        stored = self.db.query(TagCode).filter(TagCode.tag_id == tag.id).first()
        if stored is None:
            logger.warning("Tag %s is in code mode but has no code stored", tag.id)
            return False
        return hmac.compare_digest(stored.code_hash, hash_code(code.strip()))
