"""Integration tests for the recording-to-note workflow."""

import asyncio
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from oscar.main import main
from oscar.models.notes import FormatterTier
from oscar.services.notes_service import NotesService


@pytest.fixture
def make_service(test_config):
    services = []

    def factory(provider=None, on_transcript_change=None):
        service = NotesService(test_config, provider=provider, on_transcript_change=on_transcript_change)
        services.append(service)
        return service

    yield factory
    for service in services:
        service.shutdown()


@pytest.mark.integration
class TestNotesWorkflow:
    """Integration tests spanning reconciler, structurer and storage."""

    def test_recording_to_saved_note(self, make_service, make_provider):
        provider = make_provider(
            format_reply="We need to ship this by Friday. Then we celebrate.",
            title_reply="Friday Ship Plan",
        )
        live = MagicMock()
        service = make_service(provider, on_transcript_change=live)

        assert service.start_recording_session()["success"]
        for snapshot in ["um so we need", "we need to ship this", "ship this by Friday", "then we celebrate"]:
            service.publisher.publish_transcript(snapshot)
        assert service.get_live_transcript() == "um so we need to ship this by Friday then we celebrate"
        service.publisher.publish_stop()

        result = asyncio.run(service.stop_recording_session())

        assert result["success"]
        note = result["note"]
        assert note.raw_text == "um so we need to ship this by Friday then we celebrate"
        assert note.title == "Friday Ship Plan"
        assert note.formatter is FormatterTier.REMOTE
        assert live.call_args_list[-1].args[0] == note.raw_text

        saved = service.save_note(edited_text="Edited note.")
        assert saved["success"]
        history = service.list_notes()
        assert [n.text for n in history] == ["Edited note."]
        assert history[0].title == "Friday Ship Plan"

    def test_remote_outage_still_produces_note(self, make_service, failing_provider, meeting_transcript):
        service = make_service(failing_provider)

        service.start_recording_session()
        service.publisher.publish_transcript(meeting_transcript)
        result = asyncio.run(service.stop_recording_session())

        assert result["success"]
        assert result["note"].formatter is FormatterTier.HEURISTIC
        assert "Action Items:" in result["note"].formatted_text

    def test_no_api_key_uses_heuristics(self, make_service):
        service = make_service()

        service.start_recording_session()
        service.publisher.publish_transcript("Just one thought")
        result = asyncio.run(service.stop_recording_session())

        assert result["note"].formatted_text == "Just one thought"
        assert result["note"].title == "Just one thought"

    def test_empty_recording(self, make_service, make_provider):
        provider = make_provider(format_reply="unused")
        service = make_service(provider)

        service.start_recording_session()
        service.publisher.publish_transcript("   ")
        result = asyncio.run(service.stop_recording_session())

        assert not result["success"]
        assert result["error"].startswith("No speech detected")
        assert provider.requests == []
        assert not service.save_note()["success"]

    def test_save_refuses_to_overwrite_corrupt_history(self, make_service):
        service = make_service()
        service.start_recording_session()
        service.publisher.publish_transcript("Keep the old notes.")
        asyncio.run(service.stop_recording_session())
        service.store.history_file.write_text('[{"id": 1, "text": "old"', encoding="utf-8")

        result = service.save_note()

        assert not result["success"]
        assert result["error"]
        assert service.store.history_file.read_text(encoding="utf-8") == '[{"id": 1, "text": "old"'

    def test_services_do_not_share_transcripts(self, make_service):
        first = make_service()
        second = make_service()
        first.start_recording_session()
        second.start_recording_session()

        first.publisher.publish_transcript("only for the first")
        second.publisher.publish_transcript("only for the second")

        assert first.publisher.topic != second.publisher.topic
        assert first.get_live_transcript() == "only for the first"
        assert second.get_live_transcript() == "only for the second"

        first.publisher.publish_stop()
        second.publisher.publish_transcript("still recording")
        assert second.get_live_transcript() == "only for the second still recording"

    def test_export(self, make_service, temp_data_dir):
        service = make_service()
        service.start_recording_session()
        service.publisher.publish_transcript("Export me.")
        asyncio.run(service.stop_recording_session())

        target = Path(temp_data_dir) / "note.txt"
        result = service.export_note(str(target))

        assert result["success"]
        assert target.read_text(encoding="utf-8") == "Export me."


@pytest.mark.integration
class TestCli:
    """Tests for the command-line entry point."""

    def test_replay_save_and_history(self, temp_data_dir, monkeypatch, capsys):
        monkeypatch.delenv("OSCAR_API_KEY", raising=False)
        monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
        config_path = Path(temp_data_dir) / "oscar.yaml"
        config_path.write_text(
            "storage:\n  data_directory: data\nlogging:\n  file_path: logs/oscar.log\n  console_output: false\n",
            encoding="utf-8",
        )
        source = Path(temp_data_dir) / "snapshots.txt"
        source.write_text("hello wor\nworld peace\n", encoding="utf-8")

        main(["--config", str(config_path), "replay", str(source), "--save"])
        out = capsys.readouterr().out
        assert "hello world peace" in out

        main(["--config", str(config_path), "history"])
        out = capsys.readouterr().out
        assert "hello world peace" in out

    def test_missing_config_reports_error(self, temp_data_dir, capsys):
        missing = Path(temp_data_dir) / "absent.yaml"

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(missing), "history"])

        assert exc_info.value.code == 1
        assert "Error: Configuration file not found" in capsys.readouterr().out

    def test_invalid_config_reports_error(self, temp_data_dir, capsys):
        config_path = Path(temp_data_dir) / "oscar.yaml"
        config_path.write_text("storage: [unclosed\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "history"])

        assert exc_info.value.code == 1
        assert "Error: Invalid YAML" in capsys.readouterr().out
