from __future__ import annotations

from typing import TYPE_CHECKING

import pyperclip
import pytest

from git_ingest import clipboard
from git_ingest.exceptions import ClipboardError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.mark.unit
def test_copy_to_clipboard_delegates_to_pyperclip(mocker: MockerFixture) -> None:
    copy = mocker.patch.object(clipboard.pyperclip, "copy")

    clipboard.copy_to_clipboard("digest")

    copy.assert_called_once_with("digest")


@pytest.mark.unit
def test_copy_to_clipboard_wraps_pyperclip_errors(mocker: MockerFixture) -> None:
    mocker.patch.object(
        clipboard.pyperclip,
        "copy",
        side_effect=pyperclip.PyperclipException("no copy mechanism"),
    )

    with pytest.raises(ClipboardError, match="no copy mechanism"):
        clipboard.copy_to_clipboard("digest")
