import pyperclip

from git_ingest.exceptions import ClipboardError


def copy_to_clipboard(text: str) -> None:
    """Place `text` on the system clipboard.

    Raises:
        ClipboardError: if no clipboard mechanism is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(reason=str(e)) from e
