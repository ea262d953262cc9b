"""Incident generator, store and feed simulator."""

import random
import unittest

from support import make_incident, make_store

from vuda.feed.generator import CITY_CENTER, SPREAD, IncidentGenerator
from vuda.feed.simulator import FeedSimulator
from vuda.feed.store import MAX_INCIDENTS
from vuda.shared.errors import ValidationError
from vuda.shared.incidents import INCIDENT_TYPES, ChatMessage, IncidentAction


class TestIncidentGenerator(unittest.TestCase):

    def setUp(self):
        self.generator = IncidentGenerator(rng=random.Random(42))

    def test_coordinates_stay_in_jitter_box(self):
        lat0, lon0 = CITY_CENTER
        for _ in range(500):
            inc = self.generator.generate()
            self.assertTrue(lat0 - SPREAD <= inc.latitude <= lat0 + SPREAD)
            self.assertTrue(lon0 - SPREAD <= inc.longitude <= lon0 + SPREAD)

    def test_fields_come_from_fixed_pools(self):
        for _ in range(200):
            inc = self.generator.generate()
            self.assertIn(inc.type, INCIDENT_TYPES)
            self.assertIn(inc.status, ("Critical", "Warning", "New", "Resolved"))
            self.assertTrue(inc.initial_ai_system_analysis)
            self.assertTrue(inc.initial_actions_taken)
            self.assertTrue(inc.action_log)
            self.assertEqual(inc.chat_history, [])

    def test_presummarized_incidents_quote_the_analysis(self):
        summarized = [i for i in (self.generator.generate() for _ in range(200)) if i.generated_summary]
        self.assertTrue(summarized)
        for inc in summarized:
            self.assertTrue(inc.generated_summary.startswith("AI-generated summary: "))
            self.assertTrue(inc.generated_summary.endswith("... Further details are being processed."))
            self.assertIn(inc.initial_ai_system_analysis[:100], inc.generated_summary)

    def test_preferred_types_dominate(self):
        types = [self.generator.generate().type for _ in range(2000)]
        preferred = sum(1 for t in types if t in ("Public Safety Threat", "Traffic Accident"))
        self.assertTrue(0.5 < preferred / len(types) < 0.7)

    def test_resolved_share_is_small(self):
        statuses = [self.generator.generate().status for _ in range(2000)]
        self.assertTrue(0.05 < statuses.count("Resolved") / len(statuses) < 0.15)

    def test_ids_are_unique_and_counter_based(self):
        ids = [self.generator.generate().id for _ in range(100)]
        self.assertEqual(len(set(ids)), 100)
        self.assertTrue(ids[0].startswith("inc-1-"))
        self.assertTrue(ids[99].startswith("inc-100-"))

    def test_each_generator_owns_its_counter(self):
        other = IncidentGenerator(rng=random.Random(1))
        self.generator.generate()
        self.generator.generate()
        self.assertTrue(other.generate().id.startswith("inc-1-"))

    def test_initial_batch_is_newest_first(self):
        batch = self.generator.generate_initial_batch(7)
        self.assertEqual(len(batch), 7)
        stamps = [i.timestamp for i in batch]
        self.assertEqual(stamps, sorted(stamps, reverse=True))


class TestIncidentStore(unittest.TestCase):

    def setUp(self):
        self.store, self.generator = make_store()

    def test_full_store_drops_oldest(self):
        for n in range(MAX_INCIDENTS):
            self.store.append(make_incident(f"inc-{n}"))
        self.assertEqual(len(self.store), MAX_INCIDENTS)
        self.store.append(make_incident("inc-new"))
        ids = [i.id for i in self.store.snapshot()]
        self.assertEqual(len(ids), MAX_INCIDENTS)
        self.assertEqual(ids[0], "inc-new")
        self.assertNotIn("inc-0", ids)
        self.assertEqual(ids[-1], "inc-1")

    def test_update_by_unknown_id_is_a_no_op(self):
        self.store.append(make_incident("a"))
        self.store.append(make_incident("b"))
        before = self.store.snapshot()
        self.assertIsNone(self.store.update_by_id("missing", {"status": "Resolved"}))
        self.assertEqual(self.store.snapshot(), before)

    def test_update_by_id_keeps_order(self):
        for n in ("a", "b", "c"):
            self.store.append(make_incident(n))
        updated = self.store.update_by_id("b", {"status": "Resolved"})
        self.assertEqual(updated.status, "Resolved")
        self.assertEqual([i.id for i in self.store.snapshot()], ["c", "b", "a"])

    def test_update_by_id_accepts_wire_keys(self):
        self.store.append(make_incident("a"))
        updated = self.store.update_by_id("a", {"generatedSummary": "x", "status": "Resolved"})
        self.assertEqual(updated.generated_summary, "x")
        self.assertEqual(self.store.get("a").generated_summary, "x")
        self.assertEqual(self.store.count_active(), 0)

    def test_update_by_id_rejects_invalid_status(self):
        self.store.append(make_incident("a", status="Critical"))
        with self.assertRaises(ValidationError):
            self.store.update_by_id("a", {"status": "Bogus"})
        self.assertEqual(self.store.get("a").status, "Critical")
        self.assertEqual(self.store.count_active(), 1)

    def test_update_by_id_rejects_unknown_field(self):
        self.store.append(make_incident("a"))
        with self.assertRaises(ValidationError):
            self.store.update_by_id("a", {"severity": "high"})

    def test_count_active_excludes_resolved(self):
        self.store.refresh()
        items = self.store.snapshot()
        self.assertEqual(len(items), 7)
        self.assertEqual(self.store.count_active(), sum(1 for i in items if i.status != "Resolved"))

    def test_refresh_replaces_the_list(self):
        self.store.append(make_incident("manual"))
        self.store.refresh()
        ids = [i.id for i in self.store.snapshot()]
        self.assertNotIn("manual", ids)
        self.assertEqual(len(ids), self.store.batch_size)

    def test_fill_summary_only_sets_once(self):
        self.store.append(make_incident("a"))
        self.store.fill_summary("a", "first")
        self.store.fill_summary("a", "second")
        self.assertEqual(self.store.get("a").generated_summary, "first")

    def test_appends_keep_order(self):
        self.store.append(make_incident("a"))
        self.store.append_action("a", IncidentAction(timestamp="10:00:00", description="one"))
        self.store.append_action("a", IncidentAction(timestamp="10:00:01", description="two"))
        self.store.append_chat("a", ChatMessage(sender="user", text="hi"))
        inc = self.store.get("a")
        self.assertEqual([a.description for a in inc.action_log], ["one", "two"])
        self.assertEqual([m.text for m in inc.chat_history], ["hi"])
        self.assertIsNone(self.store.append_action("missing", IncidentAction(timestamp="x", description="y")))

    def test_newly_added_window(self):
        self.store.append(make_incident("fresh"))
        self.assertIn("fresh", self.store.newly_added())
        self.assertEqual(self.store.newly_added(window_s=-1), set())


class TestFeedSimulator(unittest.TestCase):

    def setUp(self):
        self.store, self.generator = make_store()

    def test_tick_appends_to_store(self):
        sim = FeedSimulator(self.store, self.generator, rng=random.Random(3))
        inc = sim.tick()
        self.assertEqual(self.store.snapshot()[0].id, inc.id)

    def test_delay_in_range(self):
        sim = FeedSimulator(self.store, self.generator, min_interval_s=10, max_interval_s=15, rng=random.Random(3))
        for _ in range(50):
            self.assertTrue(10 <= sim.next_delay() <= 15)

    def test_start_and_stop(self):
        sim = FeedSimulator(self.store, self.generator, min_interval_s=0.01, max_interval_s=0.02)
        sim.start()
        self.assertTrue(sim.running)
        sim.stop()
        self.assertFalse(sim.running)

    def test_stop_waits_for_the_worker(self):
        sim = FeedSimulator(self.store, self.generator, min_interval_s=0.01, max_interval_s=0.02)
        sim.start()
        worker = sim._thread
        sim.stop()
        self.assertFalse(worker.is_alive())
        sim.start()
        self.assertIsNot(sim._thread, worker)
        sim.stop()


if __name__ == "__main__":
    unittest.main()
