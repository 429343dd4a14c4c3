class DependencyParseError(Exception):
    pass


class InvalidInput(DependencyParseError, ValueError):
    pass


class ParseFailure(DependencyParseError):

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result


class OracleUnavailable(DependencyParseError):
    pass


class SearchBudgetExceeded(DependencyParseError):

    def __init__(self, limit, spans_solved):
        super().__init__(f"search budget of {limit} spans exceeded ({spans_solved} solved)")
        self.limit = limit
        self.spans_solved = spans_solved
