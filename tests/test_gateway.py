"""Gemini gateway: parsing, failure mapping and prompt rendering."""

import unittest

from support import VIDEO_URI, fake_model, make_settings, sent_parts

from vuda.agents.base import _parse_json
from vuda.agents.chat.chat import IncidentChat
from vuda.agents.chat.prompts import render_chat_prompt
from vuda.agents.classifier.classifier import VideoClassifier
from vuda.agents.schemas import ChatRequest, ChatTurn, IncidentContext, SummaryRequest
from vuda.agents.summarizer.summarizer import IncidentSummarizer
from vuda.shared.errors import ConfigurationError, NetworkError, SchemaError, ValidationError
from vuda.shared.media import decode_data_uri


def _context():
    return IncidentContext(
        title="Multi-vehicle Collision",
        location="Pattom Main Road",
        timestamp="2026-01-01T12:00:00+00:00",
        initial_ai_system_analysis="Two vehicles collided.",
    )


def _summary_request():
    return SummaryRequest(
        event_title="Multi-vehicle Collision",
        location="Pattom Main Road",
        timestamp="2026-01-01T12:00:00+00:00",
        ai_analysis="Two vehicles collided.",
        actions_taken="Rerouting traffic.",
    )


class TestJsonParsing(unittest.TestCase):

    def test_strips_surrounding_prose(self):
        self.assertEqual(_parse_json('Sure! ```json\n{"summary": "ok"}\n```'), {"summary": "ok"})

    def test_text_without_object_is_schema_error(self):
        with self.assertRaises(SchemaError):
            _parse_json("I cannot help with that.")

    def test_malformed_object_is_schema_error(self):
        with self.assertRaises(SchemaError):
            _parse_json('{"summary": "ok",}')


class TestVideoClassifier(unittest.TestCase):

    def setUp(self):
        self.cfg = make_settings()

    def test_classify_returns_typed_result(self):
        model = fake_model({"isSignificant": True, "incidentType": "Fighting"})
        result = VideoClassifier(self.cfg, model=model).classify(VIDEO_URI)
        self.assertTrue(result.is_significant)
        self.assertEqual(result.incident_type, "Fighting")
        model.generate_content.assert_called_once()

    def test_missing_field_is_schema_error(self):
        model = fake_model({"isSignificant": True})
        with self.assertRaises(SchemaError) as ctx:
            VideoClassifier(self.cfg, model=model).classify(VIDEO_URI)
        self.assertIn("invalid data structure", str(ctx.exception))

    def test_report_defaults_department(self):
        model = fake_model({"report": "A fight broke out.", "incidentType": "Physical_Assault"})
        out = VideoClassifier(self.cfg, model=model).report(VIDEO_URI)
        self.assertEqual(out.suggested_department, "None")

    def test_unconfigured_provider(self):
        cfg = make_settings(gcp_project="", missing=("GCP_PROJECT",))
        with self.assertRaises(ConfigurationError):
            VideoClassifier(cfg).classify(VIDEO_URI)

    def test_bad_data_uri_never_reaches_model(self):
        model = fake_model({"isSignificant": False, "incidentType": "Normal_Activity"})
        with self.assertRaises(ValidationError):
            VideoClassifier(self.cfg, model=model).classify("not-a-data-uri")
        model.generate_content.assert_not_called()

    def test_decode_data_uri(self):
        mime, data = decode_data_uri(VIDEO_URI)
        self.assertEqual(mime, "video/mp4")
        self.assertTrue(data.startswith(b"\x00\x00\x00 ftyp"))


class TestSummarizer(unittest.TestCase):

    def setUp(self):
        self.cfg = make_settings()

    def test_transport_error_message_is_kept(self):
        model = fake_model(error=RuntimeError("503 Service Unavailable"))
        with self.assertRaises(NetworkError) as ctx:
            IncidentSummarizer(self.cfg, model=model).summarize(_summary_request())
        self.assertEqual(str(ctx.exception), "503 Service Unavailable")

    def test_empty_summary_is_rejected(self):
        model = fake_model({"summary": ""})
        with self.assertRaises(SchemaError):
            IncidentSummarizer(self.cfg, model=model).summarize(_summary_request())


class TestIncidentChat(unittest.TestCase):

    def setUp(self):
        self.cfg = make_settings()

    def test_empty_history_serializes_as_list(self):
        req = ChatRequest(user_question="Any injuries?", incident_context=_context())
        self.assertEqual(req.model_dump(by_alias=True)["chatHistory"], [])
        self.assertIn("No previous messages in this conversation.", render_chat_prompt(req))

    def test_prompt_labels_turns(self):
        req = ChatRequest(
            user_question="And now?",
            incident_context=_context(),
            chat_history=[ChatTurn(sender="user", text="Any injuries?"), ChatTurn(sender="ai", text="Two people.")],
        )
        prompt = render_chat_prompt(req)
        self.assertIn("User: Any injuries?", prompt)
        self.assertIn("AI: Two people.", prompt)
        self.assertTrue(prompt.endswith("Current User Question: And now?"))

    def test_only_last_ten_turns_are_sent(self):
        model = fake_model({"aiResponse": "ok"})
        history = [ChatTurn(sender="user", text=f"q{n}") for n in range(15)]
        req = ChatRequest(user_question="latest", incident_context=_context(), chat_history=history)
        IncidentChat(self.cfg, model=model).reply(req)
        prompt = sent_parts(model)[1]
        self.assertNotIn("User: q4\n", prompt)
        self.assertIn("User: q5", prompt)
        self.assertIn("User: q14", prompt)


if __name__ == "__main__":
    unittest.main()
