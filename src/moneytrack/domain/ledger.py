"""Ledger domain service."""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence

from moneytrack.domain.column_roles import (
    column_options,
    describe_unresolved,
    is_strict_column,
    require_roles,
    resolve_column_roles,
)
from moneytrack.domain.config import LedgerConfig
from moneytrack.domain.entities import (
    CategoryList,
    CategoryTotal,
    ColumnRoleMap,
    LedgerSnapshot,
    Role,
    TransactionKind,
    TransactionRecord,
    TypeLabels,
)
from moneytrack.domain.extraction import TransactionExtractionService
from moneytrack.domain.text_parser import TextTransactionParser, infer_type_labels
from moneytrack.logging_setup import get_logger
from moneytrack.sheets.base import SheetStore
from moneytrack.utils.amount_parser import coerce_amount
from moneytrack.utils.date_parser import DateFormat, detect_date_format

UNCATEGORIZED = "Uncategorized"

_logger = get_logger("moneytrack.domain.ledger")


class LedgerService:
    """Service for reading, extending and summarizing a transaction sheet."""

    def __init__(self, store: SheetStore, config: Optional[LedgerConfig] = None):
        """Initialize ledger service.

        Args:
            store: Sheet store holding the ledger
            config: Ledger configuration (defaults to :class:`LedgerConfig`)
        """
        self.store = store
        self.config = config or LedgerConfig()

    def load(self) -> LedgerSnapshot:
        """Read the whole sheet and resolve its column roles."""
        rows = self.store.read()
        if not rows:
            return LedgerSnapshot(
                headers=(), rows=(), roles=ColumnRoleMap(), location=self.store.location
            )

        headers = tuple(header.strip() for header in rows[0])
        records = tuple(
            {header: (row[i] if i < len(row) else "") for i, header in enumerate(headers)}
            for row in rows[1:]
        )
        roles = resolve_column_roles(headers)
        _logger.debug("Loaded %d row(s) from %s", len(records), self.store.location)
        return LedgerSnapshot(
            headers=headers, rows=records, roles=roles, location=self.store.location
        )

    def initialize(self) -> bool:
        """Create the sheet with the configured columns.

        Returns:
            True if the sheet was created, False if it already had a header
        """
        if self.store.headers():
            return False
        self.store.create(self.config.columns)
        return True

    def layout(self, snapshot: LedgerSnapshot) -> tuple[tuple[str, ...], ColumnRoleMap]:
        """Headers and roles to write with; configured columns for a new sheet."""
        if snapshot.headers:
            return snapshot.headers, snapshot.roles
        return self.config.columns, resolve_column_roles(self.config.columns)

    def diagnostics(self, snapshot: LedgerSnapshot) -> list[str]:
        """Problems a user should know about before relying on the sheet."""
        if not snapshot.headers:
            return [f"Sheet {snapshot.location} has no header row yet"]
        return describe_unresolved(snapshot.roles)

    def column_samples(self, snapshot: LedgerSnapshot) -> Optional[dict[str, list[str]]]:
        """Existing values per column, or None for a sheet without data rows."""
        if not snapshot.rows:
            return None
        return {header: snapshot.values(header) for header in snapshot.headers}

    def type_labels(self, snapshot: LedgerSnapshot) -> TypeLabels:
        """Labels used by the sheet's type column."""
        return infer_type_labels(
            snapshot.values(snapshot.roles.type), self.config.type_labels
        )

    def known_categories(self, snapshot: LedgerSnapshot) -> CategoryList:
        """Configured categories plus those already used in the sheet."""
        categories = self.config.categories
        type_column = snapshot.roles.type
        category_column = snapshot.roles.category
        if type_column is None or category_column is None:
            return categories

        labels = self.type_labels(snapshot)
        for row in snapshot.rows:
            kind = labels.kind_of(row.get(type_column))
            name = (row.get(category_column) or "").strip()
            if kind is not None and name:
                categories = categories.add(kind, name)
        return categories

    def parser(self, snapshot: LedgerSnapshot, today: Optional[date] = None) -> TextTransactionParser:
        """Rule-based parser that writes values the way the sheet already does."""
        _, roles = self.layout(snapshot)
        return TextTransactionParser.from_samples(
            self.config,
            roles,
            self.column_samples(snapshot),
            categories=self.known_categories(snapshot),
            today=today,
        )

    def extraction_service(
        self,
        snapshot: LedgerSnapshot,
        extractor: Optional[Any] = None,
        today: Optional[date] = None,
    ) -> TransactionExtractionService:
        """Extraction service targeting this sheet."""
        columns, roles = self.layout(snapshot)
        return TransactionExtractionService(
            self.parser(snapshot, today=today), roles, columns, extractor=extractor
        )

    def field_choices(
        self,
        snapshot: LedgerSnapshot,
        role: Role,
        kind: Optional[TransactionKind] = None,
    ) -> tuple[list[str], bool]:
        """Choices to offer when editing a field, and whether they are binding."""
        _, roles = self.layout(snapshot)
        column = roles.column_for(role) or role.value

        if role is Role.TYPE:
            labels = self.type_labels(snapshot)
            return [labels.income, labels.expense], True
        if role is Role.CATEGORY:
            kinds = [kind] if kind is not None else list(TransactionKind)
            choices: list[str] = []
            for candidate_kind in kinds:
                for name in self.known_categories(snapshot).for_kind(candidate_kind):
                    if name not in choices:
                        choices.append(name)
            return choices, bool(choices) and is_strict_column(column)
        return column_options(column, snapshot.rows), False

    def append_records(
        self, records: Sequence[TransactionRecord], snapshot: Optional[LedgerSnapshot] = None
    ) -> int:
        """Write records to the sheet, creating its header row if needed.

        Returns:
            Number of rows appended
        """
        if not records:
            return 0

        snapshot = snapshot or self.load()
        if not snapshot.headers:
            self.initialize()
        columns, roles = self.layout(snapshot)
        rows = [record.to_row(roles, columns) for record in records]
        return self.store.append(rows)

    def category_totals(
        self,
        snapshot: LedgerSnapshot,
        kind: TransactionKind,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CategoryTotal]:
        """Sum amounts per category for income or expense rows.

        Args:
            snapshot: Loaded sheet
            kind: Which rows to include
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date

        Returns:
            Totals sorted by amount, highest first

        Raises:
            UnresolvedRoleError: If the sheet has no type, category or amount column

        Note:
            Date filters need a date column; without one they are skipped.
            Rows whose date cannot be read are left out of a filtered summary.
        """
        roles = snapshot.roles
        require_roles(roles, (Role.TYPE, Role.CATEGORY, Role.AMOUNT), "summarize by category")

        in_range = self._date_filter(snapshot, start_date, end_date)
        labels = self.type_labels(snapshot)

        totals: dict[str, Decimal] = {}
        for row in snapshot.rows:
            if labels.kind_of(row.get(roles.type)) is not kind:
                continue
            if in_range is not None and not in_range(row):
                continue

            category = (row.get(roles.category) or "").strip() or UNCATEGORIZED
            totals[category] = totals.get(category, Decimal(0)) + coerce_amount(row.get(roles.amount))

        return sorted(
            (CategoryTotal(category=name, amount=amount) for name, amount in totals.items()),
            key=lambda total: (-total.amount, total.category),
        )

    def date_format(self, snapshot: LedgerSnapshot) -> DateFormat:
        """Format of the sheet's dates, detected from the first date value."""
        samples = snapshot.values(snapshot.roles.date)
        return detect_date_format(samples[0] if samples else None)

    def _date_filter(
        self,
        snapshot: LedgerSnapshot,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Optional[Callable[[Mapping[str, str]], bool]]:
        if start_date is None and end_date is None:
            return None
        date_column = snapshot.roles.date
        if date_column is None:
            _logger.warning("No date column in %s; date filter skipped", snapshot.location)
            return None

        date_format = self.date_format(snapshot)

        def in_range(row: Mapping[str, str]) -> bool:
            try:
                row_date = date_format.parse(row.get(date_column) or "")
            except ValueError:
                return False
            if start_date is not None and row_date < start_date:
                return False
            if end_date is not None and row_date > end_date:
                return False
            return True

        return in_range

    def list_records(
        self,
        snapshot: LedgerSnapshot,
        kind: Optional[TransactionKind] = None,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """Entries of the sheet, newest first.

        Args:
            snapshot: Loaded sheet
            kind: Only income or only expense rows
            category: Only rows in this category (case-insensitive);
                "Uncategorized" selects rows with a blank category
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date

        Returns:
            Records with the sheet's own cell text and coerced amounts. Rows
            with the same or an unreadable date keep their reverse sheet order.

        Raises:
            UnresolvedRoleError: If filtering by kind or category on a sheet
                without that column
        """
        roles = snapshot.roles
        needed = []
        if kind is not None:
            needed.append(Role.TYPE)
        if category is not None:
            needed.append(Role.CATEGORY)
        require_roles(roles, needed, "filter entries")

        in_range = self._date_filter(snapshot, start_date, end_date)
        labels = self.type_labels(snapshot)
        date_format = self.date_format(snapshot)
        wanted = (category or "").strip().lower()

        entries: list[tuple[date, int, TransactionRecord]] = []
        for position, row in enumerate(snapshot.rows):
            if kind is not None and labels.kind_of(row.get(roles.type)) is not kind:
                continue
            if in_range is not None and not in_range(row):
                continue

            record = _record_from_row(row, roles)
            if category is not None and (record.category or UNCATEGORIZED).lower() != wanted:
                continue

            try:
                row_date = date_format.parse(record.date)
            except ValueError:
                row_date = date.min
            entries.append((row_date, position, record))

        entries.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
        return [record for _, _, record in entries]

    def add_category(self, kind: TransactionKind, name: str) -> LedgerConfig:
        """Add a known category; returns the updated configuration."""
        self.config = self.config.with_categories(self.config.categories.add(kind, name))
        return self.config


def total_amount(totals: Sequence[CategoryTotal]) -> Decimal:
    """Sum of category totals."""
    return sum((total.amount for total in totals), Decimal(0))


def _record_from_row(row: Mapping[str, str], roles: ColumnRoleMap) -> TransactionRecord:
    def cell(role: Role) -> str:
        column = roles.column_for(role)
        return (row.get(column) or "").strip() if column is not None else ""

    return TransactionRecord(
        date=cell(Role.DATE),
        type=cell(Role.TYPE),
        amount=coerce_amount(cell(Role.AMOUNT)),
        category=cell(Role.CATEGORY),
        description=cell(Role.DESCRIPTION),
    )
