from __future__ import annotations

import random
import unittest

from pydantic import ValidationError

from chain_index.sync_stat.events import RollForwardEvent, RollBackwardEvent, ResumeEvent
from chain_index.sync_stat.sync_stats import SyncStats
from common.chain.block import ChainIndexBlock
from common.chain.point import ChainPoint, ChainTip


def _point(slot: int | None) -> ChainPoint:
    if slot is None:
        return ChainPoint.genesis()
    return ChainPoint.new(slot, slot.to_bytes(4, "big"))


def _tip(slot: int | None) -> ChainTip:
    if slot is None:
        return ChainTip.genesis()
    return ChainTip.new(slot, slot.to_bytes(4, "big"), slot // 2)


def _random_stats(rnd: random.Random) -> SyncStats:
    def _random_point() -> ChainPoint:
        return _point(None if rnd.random() < 0.3 else rnd.randrange(0, 10_000))

    return SyncStats(
        applied_block_cnt=rnd.randrange(0, 100),
        applied_rollback_cnt=rnd.randrange(0, 10),
        chain_sync_point=_random_point(),
        node_point=_random_point(),
    )


class TestSyncStatsCombine(unittest.TestCase):
    def setUp(self):
        self._rnd = random.Random(20240301)

    def test_empty(self):
        empty = SyncStats.empty()
        self.assertEqual(empty.applied_block_cnt, 0)
        self.assertEqual(empty.applied_rollback_cnt, 0)
        self.assertTrue(empty.chain_sync_point.is_genesis)
        self.assertTrue(empty.node_point.is_genesis)
        self.assertTrue(empty.is_empty)

    def test_identity(self):
        empty = SyncStats.empty()
        for _ in range(200):
            stats = _random_stats(self._rnd)
            self.assertEqual(stats + empty, stats)
            self.assertEqual(empty + stats, stats)

    def test_associativity(self):
        for _ in range(200):
            a, b, c = _random_stats(self._rnd), _random_stats(self._rnd), _random_stats(self._rnd)
            self.assertEqual((a + b) + c, a + (b + c))

    def test_counters_are_added(self):
        a = SyncStats(applied_block_cnt=3, applied_rollback_cnt=1)
        b = SyncStats(applied_block_cnt=4, applied_rollback_cnt=2)
        self.assertEqual((a + b).applied_block_cnt, 7)
        self.assertEqual((a + b).applied_rollback_cnt, 3)

    def test_points_are_right_biased(self):
        ahead = SyncStats(chain_sync_point=_point(900), node_point=_point(1000))
        behind = SyncStats(chain_sync_point=_point(100), node_point=_point(200))

        self.assertEqual((ahead + behind).chain_sync_point, _point(100))
        self.assertEqual((ahead + behind).node_point, _point(200))
        self.assertEqual((behind + ahead).chain_sync_point, _point(900))
        self.assertEqual((behind + ahead).node_point, _point(1000))

    def test_genesis_point_does_not_override(self):
        a = SyncStats(chain_sync_point=_point(10), node_point=_point(20))
        b = SyncStats(applied_block_cnt=1)
        self.assertEqual((a + b).chain_sync_point, _point(10))
        self.assertEqual((a + b).node_point, _point(20))

    def test_combine(self):
        stats_list = [_random_stats(self._rnd) for _ in range(10)]
        expected = SyncStats.empty()
        for stats in stats_list:
            expected = expected + stats

        self.assertEqual(SyncStats.combine(*stats_list), expected)
        self.assertEqual(SyncStats.combine(), SyncStats.empty())

    def test_add_wrong_type(self):
        with self.assertRaises(TypeError):
            SyncStats.empty() + 1  # noqa

    def test_negative_counter(self):
        with self.assertRaises(ValidationError):
            SyncStats(applied_block_cnt=-1)

    def test_json(self):
        stats = SyncStats(applied_block_cnt=2, chain_sync_point=_point(5), node_point=_point(7))
        self.assertEqual(
            stats.to_dict(),
            {
                "applied_block_cnt": 2,
                "applied_rollback_cnt": 0,
                "chain_sync_point": {"slot": 5, "block_id": "0x00000005"},
                "node_point": {"slot": 7, "block_id": "0x00000007"},
            },
        )
        self.assertEqual(SyncStats.from_json(stats.to_json()), stats)


class TestSyncStatsFromEvent(unittest.TestCase):
    def test_roll_forward(self):
        event = RollForwardEvent(block=ChainIndexBlock(tip=_tip(10)), node_tip=_tip(50))
        stats = SyncStats.from_event(event)
        self.assertEqual(
            stats,
            SyncStats(applied_block_cnt=1, chain_sync_point=_point(10), node_point=_point(50)),
        )

    def test_roll_backward(self):
        event = RollBackwardEvent(point=_point(8), node_tip=_tip(51))
        stats = SyncStats.from_event(event)
        self.assertEqual(
            stats,
            SyncStats(applied_rollback_cnt=1, chain_sync_point=_point(8), node_point=_point(51)),
        )

    def test_resume_keeps_node_point_unknown(self):
        stats = SyncStats.from_event(ResumeEvent(point=_point(8)))
        self.assertEqual(stats, SyncStats(chain_sync_point=_point(8)))
        self.assertTrue(stats.node_point.is_genesis)

    def test_resume_after_roll_forward(self):
        stats = SyncStats.combine(
            SyncStats.from_event(RollForwardEvent(block=ChainIndexBlock(tip=_tip(10)), node_tip=_tip(50))),
            SyncStats.from_event(ResumeEvent(point=_point(7))),
        )
        self.assertEqual(stats.chain_sync_point, _point(7))
        self.assertEqual(stats.node_point, _point(50))

    def test_roll_forward_at_genesis_tips(self):
        event = RollForwardEvent(block=ChainIndexBlock(tip=_tip(None)), node_tip=_tip(None))
        stats = SyncStats.from_event(event)
        self.assertEqual(stats, SyncStats(applied_block_cnt=1))

    def test_from_raw(self):
        stats = SyncStats(applied_block_cnt=5)
        self.assertIs(SyncStats.from_raw(stats), stats)
        self.assertEqual(SyncStats.from_raw(None), SyncStats.empty())
        self.assertEqual(SyncStats.from_raw(ResumeEvent(point=_point(3))), SyncStats(chain_sync_point=_point(3)))

    def test_wrong_event(self):
        with self.assertRaises(ValueError):
            SyncStats.from_event("roll-forward")  # noqa

    def test_counter_additivity(self):
        rnd = random.Random(42)
        for _ in range(20):
            fwd_cnt, back_cnt = rnd.randrange(0, 50), rnd.randrange(0, 50)
            event_list = [
                RollForwardEvent(block=ChainIndexBlock(tip=_tip(i)), node_tip=_tip(1000)) for i in range(fwd_cnt)
            ]
            event_list += [RollBackwardEvent(point=_point(i), node_tip=_tip(1000)) for i in range(back_cnt)]
            rnd.shuffle(event_list)

            stats = SyncStats.combine(*[SyncStats.from_event(event) for event in event_list])
            self.assertEqual(stats.applied_block_cnt, fwd_cnt)
            self.assertEqual(stats.applied_rollback_cnt, back_cnt)


if __name__ == "__main__":
    unittest.main()
