from .errors import EmptySourceError, MissingEntryPointError


def validate(source: str, marker: str = 'int main') -> None:
    """Cheap textual pre-check run before anything is written or compiled.

    The entry-point test is a substring match, not a parse: a ``main`` hidden
    in a comment passes and an unusual signature fails. Both are accepted.
    """
    if not source or not source.strip():
        raise EmptySourceError()
    if marker not in source:
        raise MissingEntryPointError()
