from __future__ import annotations


class LearnStackError(Exception):
    pass


class FetchError(LearnStackError):
    def __init__(self, url: str, status: int | None = None, cause: BaseException | None = None) -> None:
        self.url = url
        self.status = status
        self.cause = cause
        reason = f"HTTP {status}" if status is not None else repr(cause)
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(LearnStackError):
    pass
