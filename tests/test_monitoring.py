import random
import unittest
from unittest.mock import patch

from support import fake_model, make_gateway, make_settings, sent_parts

from vuda.agents.schemas import VideoReport
from vuda.monitoring.handoff import IncidentInbox, UploadService, incident_from_report
from vuda.monitoring.live import LiveLogStream, tag_variant
from vuda.monitoring.videos import MonitoringService, anomaly_priority
from vuda.shared.media import VideoUpload

CLIP = VideoUpload("gate.mp4", "video/mp4", b"\x00\x00\x00 ftypisom")


class TestMonitoringService(unittest.TestCase):

    def setUp(self):
        self.cfg = make_settings()

    def service(self, **models):
        gw = make_gateway(self.cfg, **models)
        return MonitoringService(gw.classifier, gw.chat)

    def test_significant_clip(self):
        svc = self.service(video=fake_model({"isSignificant": True, "incidentType": "Weapon_Visible"}))
        feed = svc.add(CLIP)
        self.assertEqual(feed.status, "pending")
        analyzed, toast = svc.analyze(feed.id)
        self.assertEqual(analyzed.status, "analyzed")
        self.assertEqual(analyzed.analysis_result.incident_type, "Weapon_Visible")
        self.assertEqual(analyzed.chat_history[-1].text, "Anomaly Detected: Weapon Visible")
        self.assertEqual(toast.variant, "destructive")

    def test_normal_activity(self):
        svc = self.service()
        analyzed, toast = svc.analyze(svc.add(CLIP).id)
        self.assertEqual(analyzed.chat_history[-1].text, "Analysis complete. No significant anomalies detected.")
        self.assertEqual(toast.variant, "default")

    def test_network_error_keeps_message(self):
        svc = self.service(video=fake_model(error=RuntimeError("quota exhausted")))
        failed, toast = svc.analyze(svc.add(CLIP).id)
        self.assertEqual(failed.status, "error")
        self.assertEqual(failed.error, "quota exhausted")
        self.assertEqual(failed.chat_history[-1].text, "Error: quota exhausted")
        self.assertEqual(toast.title, "Analysis Error")
        self.assertEqual(svc.get(failed.id).status, "error")

    def test_priority_banding(self):
        self.assertEqual(anomaly_priority("Weapon_Visible"), "Critical")
        self.assertEqual(anomaly_priority("Fighting"), "High")
        self.assertEqual(anomaly_priority("Shoplifting"), "Medium")
        self.assertEqual(anomaly_priority("Something_Else"), "Medium")

    def test_chat_attaches_clip(self):
        chat = fake_model({"aiResponse": "A person is running."})
        svc = self.service(chat=chat)
        feed = svc.add(CLIP)
        updated, toast = svc.chat(feed.id, "What happens?")
        self.assertEqual(updated.chat_history[-1].text, "A person is running.")
        self.assertIsNone(toast)
        parts = sent_parts(chat)
        self.assertEqual(len(parts), 3)
        self.assertIn("Video Analysis: gate.mp4", parts[1])
        self.assertIsNone(svc.chat("missing", "hi"))

    def test_json_omits_bytes(self):
        out = self.service().add(CLIP).to_json()
        self.assertNotIn("data", out)
        self.assertEqual(out["contentType"], "video/mp4")

    def test_feed_list_is_capped(self):
        gw = make_gateway(self.cfg)
        svc = MonitoringService(gw.classifier, gw.chat, capacity=3)
        first = svc.add(CLIP)
        added = [svc.add(CLIP) for _ in range(4)]
        ids = [f.id for f in svc.list()]
        self.assertEqual(len(ids), 3)
        self.assertNotIn(first.id, ids)
        self.assertEqual(ids, [f.id for f in added[1:]])
        self.assertIsNone(svc.analyze(first.id))

    def test_cap_keeps_clips_being_analyzed(self):
        gw = make_gateway(self.cfg)
        svc = MonitoringService(gw.classifier, gw.chat, capacity=2)
        busy = svc.add(CLIP)
        svc._put(busy.model_copy(update={"status": "analyzing"}))
        svc.add(CLIP)
        newest = svc.add(CLIP)
        ids = [f.id for f in svc.list()]
        self.assertEqual(ids, [busy.id, newest.id])


class TestUploadHandoff(unittest.TestCase):

    def test_unknown_type_becomes_suspicious_activity(self):
        report = VideoReport(report="Nothing unusual.", incident_type="Other")
        inc = incident_from_report(report, 1, random.Random(1))
        self.assertEqual(inc.type, "Suspicious Activity")
        self.assertEqual(inc.title, "Uploaded Video: Other")
        self.assertEqual(inc.status, "Critical")
        self.assertLessEqual(abs(inc.latitude - 8.5241), 0.05)
        self.assertLessEqual(abs(inc.longitude - 76.9366), 0.05)
        self.assertTrue(inc.id.startswith("vid-upload-"))

    def test_analysis_hands_off_and_dispatches(self):
        video = fake_model({"report": "Fire near the market.", "incidentType": "Fire Alert", "suggestedDepartment": "Fire"})
        inbox = IncidentInbox()
        uploads = UploadService(make_gateway(make_settings(), video=video).classifier, inbox, rng=random.Random(2))
        report, incident, toast = uploads.analyze(CLIP)
        self.assertEqual(report.suggested_department, "Fire")
        self.assertEqual(incident.type, "Fire Alert")
        self.assertEqual(len(inbox), 1)
        dispatched = uploads.dispatch(incident.id, "Fire")
        self.assertEqual(dispatched.action_log[-1].description, "Operator dispatched Fire unit.")
        self.assertIsNone(uploads.dispatch("unknown"))

    def test_same_millisecond_uploads_get_distinct_ids(self):
        video = fake_model({"report": "Crowd gathering.", "incidentType": "Suspicious Activity"})
        inbox = IncidentInbox()
        uploads = UploadService(make_gateway(make_settings(), video=video).classifier, inbox)
        with patch("vuda.monitoring.handoff.time.time", return_value=1767268800.0):
            _, first, _ = uploads.analyze(CLIP)
            _, second, _ = uploads.analyze(CLIP)
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(len(inbox), 2)


class TestLiveLogStream(unittest.TestCase):

    def test_emits_in_order(self):
        script = [{"text": "one", "tags": ["System"]}, {"text": "two", "tags": ["Warning", "Traffic"]}]
        stream = LiveLogStream(script=script)
        first = stream.emit_next()
        second = stream.emit_next()
        self.assertEqual(first["text"], "one")
        self.assertEqual(second["variants"], ["destructive", "outline"])
        self.assertIsNone(stream.emit_next())
        self.assertTrue(stream.finished)
        self.assertEqual([e["text"] for e in stream.logs()], ["one", "two"])

    def test_stop_waits_for_the_worker(self):
        stream = LiveLogStream(script=[{"text": "one", "tags": []}], interval_s=5, connect_delay_s=5)
        stream.start()
        worker = stream._thread
        stream.stop()
        self.assertFalse(worker.is_alive())
        self.assertEqual(stream.logs(), [])

    def test_tag_variants(self):
        self.assertEqual(tag_variant("Resolved"), "default")
        self.assertEqual(tag_variant("System"), "secondary")
        self.assertEqual(tag_variant("Minor Infraction"), "destructive")


if __name__ == "__main__":
    unittest.main()
