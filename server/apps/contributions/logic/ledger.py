"""Contribution ledger: append events, read them back per contributor."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, final

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count

from server.apps.accounts.logic.identity import require_caller
from server.apps.contributions.models import Contribution, ContributionKind
from server.apps.files.models import FileRecord

if TYPE_CHECKING:
    from server.apps.accounts.models import User

logger = logging.getLogger(__name__)

UNKNOWN_FILE_NAME: Final = 'Unknown file'


@final
@dataclass(frozen=True)
class ContributionEntry:
    """Contribution with the referenced file name resolved at read time."""

    contribution: Contribution
    file_name: str


@final
@dataclass(frozen=True)
class ContributionCounts:
    """Number of contributions per kind."""

    total: int = 0
    by_kind: dict[str, int] = field(default_factory=dict)


def record_contribution(
    caller: 'User | None',
    file_id: int,
    kind: str,
    message: str = '',
) -> Contribution:
    """Append a contribution event.

    The file reference is stored as given; it is not checked against
    existing file records.

    Args:
        caller: Resolved caller, becomes the contributor.
        file_id: ID of the file the event refers to.
        kind: One of 'upload', 'share', 'comment'.
        message: Optional free text.

    Returns:
        Created Contribution instance.

    Raises:
        UnauthenticatedError: If there is no caller.
        ValidationError: If kind is not a known contribution kind.
    """
    caller = require_caller(caller, 'record_contribution')

    if kind not in ContributionKind.values:
        raise ValidationError(f'Unknown contribution kind: {kind}')

    with transaction.atomic():
        contribution = Contribution.objects.create(
            file_id=file_id,
            contributor=caller,
            kind=kind,
            message=message,
        )

    logger.info(
        'Contribution recorded: %s on file %s by user %s (ID: %d)',
        kind,
        file_id,
        caller.pk,
        contribution.id,
    )
    return contribution


def list_own_contributions(caller: 'User | None') -> list[ContributionEntry]:
    """List the caller's contributions with file names.

    Args:
        caller: Resolved caller.

    Returns:
        Entries newest first, each with the referenced file's name or
        'Unknown file' when that file no longer exists. Empty for
        anonymous callers.
    """
    # Anonymous callers have no contributions to show, not an error
    if caller is None or not caller.is_authenticated:
        return []

    contributions = list(Contribution.objects.filter(contributor=caller))
    file_names = dict(
        FileRecord.objects.filter(
            id__in={entry.file_id for entry in contributions},
        ).values_list('id', 'name'),
    )

    return [
        ContributionEntry(
            contribution=contribution,
            file_name=file_names.get(contribution.file_id, UNKNOWN_FILE_NAME),
        )
        for contribution in contributions
    ]


def count_own_contributions(caller: 'User | None') -> ContributionCounts:
    """Count the caller's contributions per kind.

    Args:
        caller: Resolved caller.

    Returns:
        ContributionCounts, every kind present. Zeros for anonymous
        callers.
    """
    by_kind = {kind: 0 for kind in ContributionKind.values}

    if caller is None or not caller.is_authenticated:
        return ContributionCounts(total=0, by_kind=by_kind)

    rows = (
        Contribution.objects.filter(contributor=caller)
        .order_by()
        .values('kind')
        .annotate(count=Count('id'))
    )
    for row in rows:
        by_kind[row['kind']] = row['count']

    return ContributionCounts(total=sum(by_kind.values()), by_kind=by_kind)
