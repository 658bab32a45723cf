"""Interaction state: the part filter and the create/edit form.

The form has one set of fields (name, age, part) that either fill in a new
record or edit a selected one. Which of the two is modelled explicitly:

    Creating(draft) --select_for_edit--> Editing(record)
    Editing(record) --cancel_edit / update success--> Creating(draft)

Each variant is immutable; DraftState swaps them as the user acts.

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .models import DEFAULT_PART, Part, Record
from .validation import ValidationError, parse_age, validate_part

logger = logging.getLogger(__name__)

FORM_FIELDS = ("name", "age", "part")


class FilterState:
    """Currently selected part. Only SyncController.select_part changes it."""

    def __init__(self, part: Part = DEFAULT_PART) -> None:
        self._part = part

    @property
    def part(self) -> Part:
        return self._part

    def select(self, part: Part) -> bool:
        """Select a part. Returns True if the selection changed."""
        changed = part is not self._part
        self._part = part
        return changed


@dataclass(frozen=True)
class NewRecordDraft:
    """Unvalidated text typed into the form for a new record."""

    name: str = ""
    age: str = ""
    part: str = ""

    def is_blank(self) -> bool:
        return not (self.name or self.age or self.part)


@dataclass(frozen=True)
class Creating:
    draft: NewRecordDraft = NewRecordDraft()


@dataclass(frozen=True)
class Editing:
    """Edit in progress. record is a private copy, not the cached instance."""

    record: Record


FormMode = Union[Creating, Editing]


def _check_field(field: str) -> None:
    if field not in FORM_FIELDS:
        raise ValidationError("field", f"unknown form field '{field}'")


class DraftState:
    """Owns the form's current mode.

    While editing, the create-draft is kept aside so cancelling an edit
    brings back whatever the user had typed for a new record.

    Attributes:
        mode: Creating or Editing
    """

    def __init__(self) -> None:
        self.mode: FormMode = Creating()
        self._stashed_draft = NewRecordDraft()

    @property
    def is_editing(self) -> bool:
        return isinstance(self.mode, Editing)

    @property
    def editing_record(self) -> Record:
        """The edit-draft. Raises ValidationError when not editing."""
        if not isinstance(self.mode, Editing):
            raise ValidationError("edit", "no record is being edited")
        return self.mode.record

    @property
    def create_draft(self) -> NewRecordDraft:
        if isinstance(self.mode, Creating):
            return self.mode.draft
        return self._stashed_draft

    def select_for_edit(self, record: Record) -> None:
        """Start editing a copy of record."""
        if isinstance(self.mode, Creating):
            self._stashed_draft = self.mode.draft
        self.mode = Editing(replace(record))
        logger.info(f"Started editing record {record.id}")

    def cancel_edit(self) -> bool:
        """Drop the edit-draft without saving. Returns False if not editing."""
        if not isinstance(self.mode, Editing):
            return False
        logger.info(f"Cancelled editing record {self.mode.record.id}")
        self.mode = Creating(self._stashed_draft)
        return True

    def finish_edit(self, submitted: Optional[Editing] = None) -> bool:
        """Leave edit mode after a successful update.

        Args:
            submitted: The Editing state that was sent. If the form has
                moved on since (another record selected, more typing), the
                newer edit is kept.

        Returns:
            True if edit mode was left
        """
        if not isinstance(self.mode, Editing):
            return False
        if submitted is not None and self.mode is not submitted:
            logger.debug(f"Keeping newer edit of record {self.mode.record.id}")
            return False
        self.mode = Creating(self._stashed_draft)
        return True

    def reset_create(self, submitted: Optional[NewRecordDraft] = None) -> bool:
        """Clear the create-draft after a successful create.

        Args:
            submitted: The draft that was sent. Text typed after submitting
                is kept.

        Returns:
            True if the create-draft was cleared
        """
        if submitted is not None and self.create_draft is not submitted:
            logger.debug("Keeping create-draft typed after submit")
            return False
        self._stashed_draft = NewRecordDraft()
        if isinstance(self.mode, Creating):
            self.mode = Creating()
        return True

    def set_field(self, field: str, text: str) -> None:
        """Type into one of the shared form fields.

        In Creating mode text is stored as-is. In Editing mode age must be an
        integer and part a known Part; on error the draft is left unchanged.

        Raises:
            ValidationError: Unknown field, or unparseable value while editing
        """
        _check_field(field)
        if isinstance(self.mode, Creating):
            self.mode = Creating(replace(self.mode.draft, **{field: text}))
            return

        record = self.mode.record
        if field == "name":
            record = replace(record, name=text)
        elif field == "age":
            record = replace(record, age=parse_age(text))
        else:
            record = replace(record, part=validate_part(text))
        self.mode = Editing(record)

    def form_values(self) -> Tuple[str, str, str]:
        """Text shown in the (name, age, part) fields for the current mode."""
        if isinstance(self.mode, Creating):
            draft = self.mode.draft
            return draft.name, draft.age, draft.part
        record = self.mode.record
        return record.name, str(record.age), record.part.value
