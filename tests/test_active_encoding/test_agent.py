"""Tests for the active document agent."""

import logging
from unittest.mock import Mock

import pytest

from active_encoding.agent import ActiveDocumentAgent
from active_encoding.character.line_separator import LineSeparator
from active_encoding.document.errors import DocumentConfigurationError
from active_encoding.document.file import FileDocument
from active_encoding.document.file_editor import FileEditor
from active_encoding.document.preferences import EncodingPreferences
from active_encoding.document.workspace import WorkspaceDocument
from active_encoding.shared.config import AgentConfig


@pytest.fixture
def callback():
    return Mock()


@pytest.fixture
def agent(callback):
    return ActiveDocumentAgent(callback)


@pytest.fixture
def preferences():
    return EncodingPreferences("UTF-8")


def make_editor(tmp_path, preferences, name="notes.txt", data=b"a\n"):
    path = tmp_path / name
    path.write_bytes(data)
    return FileEditor(path, preferences)


class TestAgentLifecycle:
    """Test starting and stopping the agent."""

    def test_start_without_editor(self, agent, callback):
        document = agent.start()

        assert isinstance(document, WorkspaceDocument)
        assert agent.document is document
        assert agent.active_editor is None
        callback.encoding_info_changed.assert_not_called()

    def test_start_with_editor(self, agent, callback, tmp_path, preferences):
        editor = make_editor(tmp_path, preferences)

        document = agent.start(editor)

        assert isinstance(document, FileDocument)
        assert agent.active_editor is editor
        callback.encoding_info_changed.assert_not_called()

    def test_stop(self, agent, tmp_path, preferences):
        agent.start(make_editor(tmp_path, preferences))

        agent.stop()

        assert agent.document is None
        assert agent.active_editor is None

    def test_events_after_stop(self, agent, callback, tmp_path, preferences):
        editor = make_editor(tmp_path, preferences)
        agent.start(editor)
        agent.stop()

        preferences.set_file_encoding(editor.path, "ISO-8859-1")
        agent.property_changed(editor, 0x101)
        agent.resource_changed(None)
        agent.selection_changed(None, None)

        callback.encoding_info_changed.assert_not_called()

    def test_no_callback(self):
        with pytest.raises(DocumentConfigurationError, match="callback"):
            ActiveDocumentAgent(None)


class TestEditorActivated:
    """Test document handoff between editors."""

    def test_swap_notifies_once(self, agent, callback, tmp_path, preferences):
        agent.start()
        editor = make_editor(tmp_path, preferences)

        document = agent.editor_activated(editor)

        assert isinstance(document, FileDocument)
        assert agent.document is document
        callback.encoding_info_changed.assert_called_once_with()

    def test_same_editor_keeps_document(self, agent, callback, tmp_path, preferences):
        editor = make_editor(tmp_path, preferences)
        first = agent.start(editor)

        second = agent.editor_activated(editor)

        assert second is first
        callback.encoding_info_changed.assert_not_called()

    def test_back_to_workspace(self, agent, callback, tmp_path, preferences):
        agent.start(make_editor(tmp_path, preferences))

        document = agent.editor_activated(None)

        assert isinstance(document, WorkspaceDocument)
        callback.encoding_info_changed.assert_called_once_with()

    def test_events_go_to_new_document(self, agent, callback, tmp_path, preferences):
        old = make_editor(tmp_path, preferences, "old.txt")
        new = make_editor(tmp_path, preferences, "new.txt")
        agent.start(old)
        agent.editor_activated(new)
        callback.reset_mock()

        preferences.set_file_encoding(new.path, "ISO-8859-1")
        agent.property_changed(new, 0x101)

        assert agent.document.current_encoding == "ISO-8859-1"
        callback.encoding_info_changed.assert_called_once_with()

    def test_old_document_is_not_refreshed(self, agent, callback, tmp_path, preferences):
        old = make_editor(tmp_path, preferences, "old.txt")
        new = make_editor(tmp_path, preferences, "new.txt")
        old_document = agent.start(old)
        agent.editor_activated(new)

        preferences.set_file_encoding(old.path, "ISO-8859-1")
        agent.property_changed(old, 0x101)

        assert old_document.current_encoding == "UTF-8"


class TestAgentConfiguration:
    """Test configuration flowing into documents."""

    def test_workspace_defaults_from_config(self, callback):
        config = AgentConfig().override(
            workspace__default_encoding="ISO-8859-1",
            workspace__line_separator="CRLF",
        )
        agent = ActiveDocumentAgent(callback, config)

        document = agent.start()

        assert document.current_encoding == "ISO-8859-1"
        assert document.line_separator == LineSeparator.CRLF

    def test_detection_disabled(self, callback, tmp_path, preferences):
        config = AgentConfig().override(detection__enable_detection=False)
        agent = ActiveDocumentAgent(callback, config)
        editor = make_editor(tmp_path, preferences, data="héllo\n".encode("utf-8"))

        document = agent.start(editor)

        assert document.detected_encoding is None
        assert document.matches_encoding() is False

    def test_detection_enabled(self, agent, tmp_path, preferences):
        editor = make_editor(tmp_path, preferences, data="héllo\n".encode("utf-8"))

        document = agent.start(editor)

        assert document.detected_encoding == "UTF-8"
        assert document.matches_encoding() is True

    def test_handoff_logged_with_document_name(self, callback, tmp_path, preferences, caplog):
        agent = ActiveDocumentAgent(callback)

        with caplog.at_level(logging.DEBUG, logger="active_encoding.agent"):
            agent.start(make_editor(tmp_path, preferences))

        records = [r for r in caplog.records if r.getMessage() == "Active document changed"]
        assert records[-1].correlation_id == "notes.txt"

    def test_correlation_tracking_disabled(self, callback, caplog):
        config = AgentConfig().override(global___enable_correlation_tracking=False)
        agent = ActiveDocumentAgent(callback, config)

        with caplog.at_level(logging.DEBUG, logger="active_encoding.agent"):
            agent.start()

        records = [r for r in caplog.records if r.getMessage() == "Active document changed"]
        assert records[-1].correlation_id is None
