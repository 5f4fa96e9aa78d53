"""
Custom exceptions for viewer operations.

Every failure is local to the call that raised it: the session that raised
stays usable and keeps its prior state. All exceptions inherit from
ViewerError so display layers can catch them with a single clause.

Example:
    try:
        session.select_sheet("Archive")
    except UnknownSheetError as e:
        print(f"Pick one of: {e.available_sheets}")
    except ViewerError as e:
        print(e.to_dict())
"""


class ViewerError(Exception):
    """
    Base exception for all viewer errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code for API responses.
        details: Optional additional context about the error.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "VIEWER_ERROR",
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        """
        Convert exception to a dictionary for API responses.

        Returns:
            Dictionary containing error_code, message, and details.
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ParseError(ViewerError):
    """
    Raised when workbook bytes cannot be decoded.

    Covers buffers that are not a recognizable spreadsheet container as well
    as containers that are structurally corrupt.

    Attributes:
        source_name: Display name of the byte source, if known.
        reason: Decoder-specific reason for the failure.
    """

    def __init__(
        self,
        source_name: str | None = None,
        reason: str | None = None,
    ) -> None:
        """
        Initialize the ParseError.

        Args:
            source_name: Display name of the byte source, if known.
            reason: Decoder-specific reason for the failure.
        """
        self.source_name = source_name
        self.reason = reason

        message = "Unable to parse workbook"
        if source_name:
            message += f": {source_name}"
        if reason:
            message += f" - {reason}"

        super().__init__(
            message=message,
            error_code="PARSE_ERROR",
            details={
                "source_name": source_name,
                "reason": reason,
            },
        )


class UnknownSheetError(ViewerError):
    """
    Raised when a sheet name is not a key of the current workbook.

    Attributes:
        sheet_name: Name of the sheet that was requested.
        available_sheets: Sheet names of the current workbook.
    """

    def __init__(
        self,
        sheet_name: str,
        available_sheets: list[str] | None = None,
    ) -> None:
        """
        Initialize the UnknownSheetError.

        Args:
            sheet_name: Name of the sheet that was requested.
            available_sheets: Sheet names of the current workbook.
        """
        self.sheet_name = sheet_name
        self.available_sheets = available_sheets or []

        message = f"Sheet not found: {sheet_name}"
        if available_sheets:
            message += f". Available sheets: {', '.join(available_sheets)}"

        super().__init__(
            message=message,
            error_code="UNKNOWN_SHEET",
            details={
                "sheet_name": sheet_name,
                "available_sheets": self.available_sheets,
            },
        )


class InvalidMatchModeError(ViewerError):
    """
    Raised when a predicate mode name is not one of the supported modes.

    Attributes:
        mode: The rejected mode name.
        supported_modes: Mode names that are accepted.
    """

    def __init__(self, mode: str, supported_modes: list[str]) -> None:
        self.mode = mode
        self.supported_modes = supported_modes

        super().__init__(
            message=f"Invalid match mode: {mode}. Supported: {', '.join(supported_modes)}",
            error_code="INVALID_MATCH_MODE",
            details={
                "mode": mode,
                "supported_modes": supported_modes,
            },
        )


class NoWorkbookLoadedError(ViewerError):
    """Raised by display surfaces when an operation needs a loaded workbook."""

    def __init__(self, operation: str) -> None:
        self.operation = operation

        super().__init__(
            message=f"No workbook loaded; cannot {operation}",
            error_code="NO_WORKBOOK",
            details={"operation": operation},
        )
