"""
Viewer session: the state machine behind a spreadsheet viewer.

A ViewerSession holds the loaded workbook, the active sheet, two predicates,
the search scope, the shared case option and the current page. Every
mutating method leaves the session in a documented state and re-derives the
filtered rows from (scope, predicates, active sheet) so that the order in
which options change never matters.

States:
    EMPTY: no workbook loaded.
    LOADED: a workbook is present (it may hold zero sheets).

Example:
    session = ViewerSession()
    session.load_workbook(data, source_name="orders.xlsx")
    session.set_predicate(1, "contains", "alice")
    session.set_predicate(2, "wildcard", "2024-*")
    page = session.active_page()
    stats = session.stats()
"""

from collections.abc import Callable
from dataclasses import dataclass

from sheetview.adapters import WorkbookDecoder, create_decoder
from sheetview.config import get_settings
from sheetview.exceptions.viewer_exceptions import InvalidMatchModeError, UnknownSheetError
from sheetview.models.workbook_models import (
    FilterResult,
    MatchMode,
    MatchRule,
    Page,
    SearchScope,
    SessionState,
    SessionStats,
    Sheet,
    Workbook,
    format_file_size,
)
from sheetview.services import paginator
from sheetview.services.row_filter import filter_sheet, search_all_sheets
from sheetview.utils.logging import get_logger, timed_operation

logger = get_logger(__name__)

SessionListener = Callable[["ViewerSession"], None]

PREDICATE_SLOTS = (1, 2)


@dataclass(frozen=True)
class PredicateState:
    """Mode and query of one predicate slot."""

    mode: MatchMode = MatchMode.CONTAINS
    query: str = ""


def coerce_mode(mode: MatchMode | str) -> MatchMode:
    """
    Convert a mode name to MatchMode.

    Raises:
        InvalidMatchModeError: If the name is not a supported mode.
    """
    if isinstance(mode, MatchMode):
        return mode
    try:
        return MatchMode(mode)
    except ValueError:
        raise InvalidMatchModeError(
            mode=str(mode),
            supported_modes=[m.value for m in MatchMode],
        ) from None


class ViewerSession:
    """
    Orchestrates decoding, filtering and pagination for one viewer.

    Not thread-safe: callers serialize calls, one display event at a time.

    Attributes:
        decoder: Adapter that turns bytes into a Workbook.
        page_size: Rows per page.
    """

    def __init__(
        self,
        decoder: WorkbookDecoder | None = None,
        page_size: int | None = None,
        ignore_case: bool | None = None,
    ) -> None:
        """
        Initialize an empty session.

        Args:
            decoder: Workbook decoder. Defaults to the configured decoder.
            page_size: Rows per page. Defaults to the configured page size.
            ignore_case: Initial case option. Defaults to configuration.

        Raises:
            ValueError: If page_size is not positive.
        """
        settings = get_settings()
        self.decoder = decoder or create_decoder(settings.decoder)
        self.page_size = page_size if page_size is not None else settings.page_size
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

        self._ignore_case = settings.ignore_case if ignore_case is None else ignore_case
        self._scope = SearchScope.CURRENT_SHEET
        self._workbook: Workbook | None = None
        self._active_sheet: str | None = None
        self._predicates = [PredicateState(), PredicateState()]
        self._filtered = FilterResult()
        self._page_index = 0
        self._source_name: str | None = None
        self._source_size = 0
        self._listeners: list[SessionListener] = []

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.EMPTY if self._workbook is None else SessionState.LOADED

    @property
    def workbook(self) -> Workbook | None:
        return self._workbook

    @property
    def active_sheet(self) -> str | None:
        return self._active_sheet

    @property
    def scope(self) -> SearchScope:
        return self._scope

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def filtered_rows(self) -> FilterResult:
        return self._filtered

    @property
    def source_name(self) -> str | None:
        return self._source_name

    @property
    def source_size(self) -> int:
        return self._source_size

    @property
    def is_filtered(self) -> bool:
        return any(p.query for p in self._predicates)

    def predicate(self, slot: int) -> tuple[MatchRule, str]:
        """
        The effective rule and query of a predicate slot.

        Args:
            slot: 1 or 2.

        Returns:
            (rule, query) with the shared case option applied.
        """
        state = self._predicates[self._slot_index(slot)]
        return self._rule_for(state), state.query

    def _slot_index(self, slot: int) -> int:
        if slot not in PREDICATE_SLOTS:
            raise ValueError(f"Predicate slot must be 1 or 2, got {slot}")
        return slot - 1

    def _rule_for(self, state: PredicateState) -> MatchRule:
        return MatchRule(mode=state.mode, case_sensitive=not self._ignore_case)

    def _current_sheet(self) -> Sheet | None:
        if self._workbook is None or self._active_sheet is None:
            return None
        return self._workbook.get_sheet(self._active_sheet)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> None:
        """
        Call `listener(session)` after every state transition.

        Listeners run once the new state is in place. An exception raised by
        a listener is logged and does not reach the caller of the transition
        or stop the remaining listeners.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener failed", listener=repr(listener))

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def _refilter(self) -> None:
        """
        Recompute the filtered rows from scope, predicates and active sheet.

        With both queries empty the result is the active sheet unchanged,
        whatever the scope.
        """
        (rule1, query1), (rule2, query2) = self.predicate(1), self.predicate(2)
        sheet = self._current_sheet()

        with timed_operation(logger, "filter", scope=self._scope.value) as metrics:
            if self._workbook is None:
                self._filtered = FilterResult()
            elif self._scope is SearchScope.ALL_SHEETS and (query1 or query2):
                self._filtered = search_all_sheets(self._workbook, rule1, query1, rule2, query2)
            elif sheet is None:
                self._filtered = FilterResult()
            else:
                self._filtered = filter_sheet(sheet, rule1, query1, rule2, query2)
            metrics["matched"] = self._filtered.count

        self._page_index = 0

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def load_workbook(self, data: bytes, source_name: str | None = None) -> Workbook:
        """
        Decode bytes and make them the current workbook.

        On success the first sheet becomes active (none if the workbook has
        no sheets), both predicates reset to an empty `contains` query and
        the page index resets to 0. Scope and case options are kept.

        Args:
            data: Raw workbook bytes.
            source_name: Display name of the byte source.

        Returns:
            The decoded Workbook.

        Raises:
            ParseError: If the bytes cannot be decoded. The session keeps its
                previous workbook, filters and page.
        """
        workbook = self.decoder.decode(data, source_name)

        self._workbook = workbook
        self._source_name = source_name
        self._source_size = len(data)
        self._active_sheet = workbook.sheets[0].name if workbook.sheets else None
        self._predicates = [PredicateState(), PredicateState()]
        self._refilter()

        logger.info(
            "Workbook loaded",
            source=source_name,
            size=len(data),
            sheets=len(workbook),
            active_sheet=self._active_sheet,
        )
        self._notify()
        return workbook

    def select_sheet(self, name: str) -> None:
        """
        Make `name` the active sheet and re-run the current filter.

        Raises:
            UnknownSheetError: If no loaded workbook has a sheet called
                `name`. Session state is unchanged.
        """
        if self._workbook is None or name not in self._workbook:
            raise UnknownSheetError(
                sheet_name=name,
                available_sheets=self._workbook.sheet_names if self._workbook else [],
            )

        self._active_sheet = name
        self._refilter()
        logger.debug("Sheet selected", sheet=name, filtered=self._filtered.count)
        self._notify()

    def set_predicate(
        self,
        slot: int,
        mode: MatchMode | str,
        query: str,
        case_sensitive: bool | None = None,
    ) -> None:
        """
        Update one predicate and re-run filtering.

        Args:
            slot: 1 or 2.
            mode: Match mode or its name.
            query: Query text; surrounding whitespace is ignored and an
                empty query disables the predicate.
            case_sensitive: When given, becomes the shared case option for
                both predicates.

        Raises:
            ValueError: If slot is not 1 or 2.
            InvalidMatchModeError: If mode is not a supported mode name.
        """
        index = self._slot_index(slot)
        new_state = PredicateState(mode=coerce_mode(mode), query=(query or "").strip())

        self._predicates[index] = new_state
        if case_sensitive is not None:
            self._ignore_case = not case_sensitive
        self._refilter()
        logger.debug(
            "Predicate set",
            slot=slot,
            mode=new_state.mode.value,
            query=new_state.query,
            filtered=self._filtered.count,
        )
        self._notify()

    def clear_filters(self) -> None:
        """Empty both queries, keeping their modes."""
        self._predicates = [PredicateState(mode=p.mode) for p in self._predicates]
        self._refilter()
        logger.debug("Filters cleared", filtered=self._filtered.count)
        self._notify()

    def set_scope(self, all_sheets: bool) -> None:
        """Search every sheet (True) or only the active one (False)."""
        self._scope = SearchScope.ALL_SHEETS if all_sheets else SearchScope.CURRENT_SHEET
        self._refilter()
        logger.debug("Scope set", scope=self._scope.value, filtered=self._filtered.count)
        self._notify()

    def set_ignore_case(self, ignore: bool) -> None:
        """Set the case option shared by both predicates."""
        self._ignore_case = ignore
        self._refilter()
        logger.debug("Ignore case set", ignore_case=ignore, filtered=self._filtered.count)
        self._notify()

    def goto_page(self, index: int) -> int:
        """
        Move to a page, clamped into the valid range. Does not re-filter.

        Returns:
            The page index actually selected.
        """
        self._page_index = paginator.clamp_page_index(
            index, self._filtered.count, self.page_size
        )
        logger.debug("Page selected", requested=index, page=self._page_index)
        self._notify()
        return self._page_index

    def next_page(self) -> int:
        return self.goto_page(self._page_index + 1)

    def previous_page(self) -> int:
        return self.goto_page(self._page_index - 1)

    # ------------------------------------------------------------------
    # Queries for the display layer
    # ------------------------------------------------------------------

    def page_count(self) -> int:
        return paginator.page_count(self._filtered.count, self.page_size)

    def active_page(self) -> Page:
        """The current window of filtered rows."""
        rows = paginator.page(self._filtered.rows, self.page_size, self._page_index)
        sheet_names = paginator.page(
            self._filtered.sheet_names, self.page_size, self._page_index
        )
        return Page(
            index=self._page_index,
            size=self.page_size,
            rows=tuple(rows),
            sheet_names=tuple(sheet_names),
            total_pages=self.page_count(),
            start_row=min(self._page_index * self.page_size, self._filtered.count),
        )

    def page_window(self, width: int = 5) -> list[int]:
        """Page indices a pager bar shows around the current page."""
        return paginator.page_window(self._page_index, self.page_count(), width)

    def stats(self) -> SessionStats:
        """Summary counters for the display layer."""
        sheet = self._current_sheet()
        return SessionStats(
            total_rows=sheet.row_count if sheet else 0,
            total_columns=sheet.column_count if sheet else 0,
            filtered_count=self._filtered.count,
            sheet_names=self._workbook.sheet_names if self._workbook else [],
            active_sheet=self._active_sheet,
            page_index=self._page_index,
            page_count=self.page_count(),
            is_filtered=self.is_filtered,
            source_name=self._source_name,
            source_size=self._source_size,
            source_size_display=format_file_size(self._source_size),
        )
