"""
Test suite for AttachmentManager.

Tests count/type/size limits with whole-batch rejection, ordering and
preview handle release on remove, clear and teardown.

System role: Verification of the Attachment Manager
"""

import pytest

from dreamgen.core.exceptions import (
    AttachmentTooLargeError,
    InvalidMediaTypeError,
    TooManyAttachmentsError,
)
from dreamgen.core.generation.attachments import (
    MAX_ATTACHMENT_BYTES,
    AttachmentManager,
    PreviewHandleRegistry,
    RawFile,
)


@pytest.fixture
def manager() -> AttachmentManager:
    return AttachmentManager()


class TestAddFiles:
    """Test suite for AttachmentManager.add_files()."""

    def test_add_files_should_preserve_selection_order(self, manager, png_file) -> None:
        files = [png_file(name=f"{i}.png") for i in range(3)]

        result = manager.add_files(files)

        assert [a.filename for a in result] == ["0.png", "1.png", "2.png"]
        assert manager.handles.live_count == 3

    def test_sixth_file_should_be_rejected_and_list_unchanged(self, manager, png_file) -> None:
        manager.add_files([png_file(name=f"{i}.png") for i in range(5)])
        before = manager.attachments

        with pytest.raises(TooManyAttachmentsError):
            manager.add_files([png_file(name="extra.png")])

        assert manager.attachments == before
        assert manager.handles.live_count == 5

    def test_batch_over_limit_should_be_rejected_whole(self, manager, png_file) -> None:
        manager.add_files([png_file(name=f"{i}.png") for i in range(3)])

        with pytest.raises(TooManyAttachmentsError) as exc_info:
            manager.add_files([png_file(name=f"new{i}.png") for i in range(3)])

        assert len(manager) == 3
        assert exc_info.value.details == {"current": 3, "adding": 3, "limit": 5}

    def test_exactly_max_bytes_should_be_accepted(self, manager, png_file) -> None:
        manager.add_files([png_file(size=MAX_ATTACHMENT_BYTES)])

        assert len(manager) == 1

    def test_one_byte_over_max_should_be_rejected(self, manager, png_file) -> None:
        with pytest.raises(AttachmentTooLargeError):
            manager.add_files([png_file(size=MAX_ATTACHMENT_BYTES + 1)])

        assert len(manager) == 0

    def test_non_image_should_reject_entire_batch(self, manager, png_file) -> None:
        files = [
            png_file(name="ok.png"),
            RawFile(filename="notes.pdf", content_type="application/pdf", data=b"%PDF"),
        ]

        with pytest.raises(InvalidMediaTypeError) as exc_info:
            manager.add_files(files)

        assert len(manager) == 0
        assert manager.handles.live_count == 0
        assert exc_info.value.details["filename"] == "notes.pdf"

    def test_missing_media_type_should_be_rejected(self, manager) -> None:
        with pytest.raises(InvalidMediaTypeError):
            manager.add_files([RawFile(filename="blob", content_type=None, data=b"x")])

    def test_count_should_be_checked_before_type(self, manager) -> None:
        files = [RawFile(filename=f"{i}.txt", content_type="text/plain", data=b"x") for i in range(6)]

        with pytest.raises(TooManyAttachmentsError):
            manager.add_files(files)

    def test_empty_batch_should_be_noop(self, manager) -> None:
        assert manager.add_files([]) == []


class TestRemoveAndTeardown:
    """Test suite for preview handle release paths."""

    def test_remove_at_should_release_handle_and_reindex(self, manager, png_file) -> None:
        manager.add_files([png_file(name=f"{i}.png") for i in range(3)])
        removed_handle = manager.attachments[1].preview_handle

        result = manager.remove_at(1)

        assert [a.filename for a in result] == ["0.png", "2.png"]
        assert not manager.handles.is_live(removed_handle)
        assert manager.handles.live_count == 2

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_at_out_of_range_should_raise(self, manager, png_file, index: int) -> None:
        manager.add_files([png_file(name=f"{i}.png") for i in range(3)])

        with pytest.raises(IndexError):
            manager.remove_at(index)

        assert len(manager) == 3

    def test_clear_should_release_every_handle(self, manager, png_file) -> None:
        manager.add_files([png_file(name=f"{i}.png") for i in range(4)])

        manager.clear()

        assert len(manager) == 0
        assert manager.handles.live_count == 0

    def test_context_exit_should_release_every_handle(self, png_file) -> None:
        handles = PreviewHandleRegistry()
        with AttachmentManager(handles=handles) as manager:
            manager.add_files([png_file(), png_file()])
            assert handles.live_count == 2

        assert handles.live_count == 0

    def test_release_twice_should_be_noop(self) -> None:
        handles = PreviewHandleRegistry()
        handle = handles.allocate()

        assert handles.release(handle) is True
        assert handles.release(handle) is False
        assert handles.live_count == 0
