"""Unit tests for the compiled kernels and the pointer graph"""

import os
import sys
sys.path.insert(0, os.path.abspath('..'))

import numpy as np
import unittest

from matchmarket import core
from matchmarket.graph import PointerGraph, cycle_pairs


class TestRanks(unittest.TestCase):
  def test_pad_prefs(self):
    prefs, lengths = core.pad_prefs([[2, 0], [], [1]])
    self.assertListEqual(prefs.tolist(), [[2, 0], [-1, -1], [1, -1]])
    self.assertListEqual(lengths.tolist(), [2, 0, 1])
    self.assertEqual(prefs.dtype, np.int64)

  def test_pad_no_lists(self):
    prefs, lengths = core.pad_prefs([])
    self.assertEqual(prefs.shape, (0, 0))
    self.assertEqual(len(lengths), 0)

  def test_prefs_to_ranks(self):
    ranks = core.prefs_to_ranks([[2, 0], []], 3)
    # last column is the unmatched option, unlisted candidates rank below it
    self.assertListEqual(ranks.tolist(), [[2, 5, 1, 3], [5, 5, 5, 1]])

  def test_full_list_ranks(self):
    ranks = core.prefs_to_ranks([[1, 2, 0]], 3)
    self.assertListEqual(ranks[0].tolist(), [3, 1, 2, 4])


class TestDeferredAcceptanceKernel(unittest.TestCase):
  def test_swap_held_proposer(self):
    prefs, lengths = core.pad_prefs([[0], [0]])
    resp_ranks = core.prefs_to_ranks([[1, 0]], 2)
    prop_matches, seats, offsets, num_proposals = (
        core.deferred_acceptance_kernel(
            prefs, lengths, resp_ranks, np.array([1], dtype=np.int64)))
    self.assertListEqual(prop_matches.tolist(), [-1, 0])
    self.assertListEqual(seats.tolist(), [1])
    self.assertListEqual(offsets.tolist(), [0, 1])
    self.assertEqual(num_proposals, 2)

  def test_multi_seat(self):
    prefs, lengths = core.pad_prefs([[0], [0], [0]])
    resp_ranks = core.prefs_to_ranks([[2, 0, 1]], 3)
    prop_matches, seats, offsets, _ = core.deferred_acceptance_kernel(
        prefs, lengths, resp_ranks, np.array([2], dtype=np.int64))
    self.assertListEqual(prop_matches.tolist(), [0, -1, 0])
    self.assertListEqual(sorted(seats.tolist()), [0, 2])


class TestPointerGraph(unittest.TestCase):
  def test_two_cycles(self):
    G = PointerGraph(num_agents=2, num_objects=2)
    G.point_agent(0, 1)
    G.point_agent(1, 0)
    G.point_object(0, 1)
    G.point_object(1, 0)
    self.assertEqual(G.num_edges(), 4)
    cycles = G.find_cycles()
    self.assertListEqual(cycles, [[0, 3], [1, 2]])
    self.assertListEqual(cycle_pairs(G, cycles[0]), [(0, 1)])
    self.assertListEqual(cycle_pairs(G, cycles[1]), [(1, 0)])

  def test_chain_excluded(self):
    # a0 -> o0 -> a1 -> o1 -> a1 is a 2-cycle with a tail
    G = PointerGraph(num_agents=3, num_objects=2)
    G.point_agent(0, 0)
    G.point_object(0, 1)
    G.point_agent(1, 1)
    G.point_object(1, 1)
    G.point_agent(2, 0)
    self.assertListEqual(G.find_cycles(), [[1, 4]])

  def test_rotation_to_agent(self):
    # the walk from a0 enters the cycle at object o0
    G = PointerGraph(num_agents=2, num_objects=1)
    G.point_agent(0, 0)
    G.point_object(0, 1)
    G.point_agent(1, 0)
    cycles = G.find_cycles()
    self.assertListEqual(cycles, [[1, 2]])
    self.assertListEqual(cycle_pairs(G, cycles[0]), [(1, 0)])

  def test_no_cycle(self):
    G = PointerGraph(num_agents=2, num_objects=2)
    G.point_agent(0, 0)
    G.point_object(0, 1)
    G.point_agent(1, 1)
    self.assertListEqual(G.find_cycles(), [])

  def test_long_cycle(self):
    n = 50
    G = PointerGraph(num_agents=n, num_objects=n)
    for a in range(n):
      G.point_agent(a, a)
      G.point_object(a, (a + 1) % n)
    cycles = G.find_cycles()
    self.assertEqual(len(cycles), 1)
    pairs = cycle_pairs(G, cycles[0])
    self.assertListEqual(sorted(pairs), [(a, a) for a in range(n)])
    self.assertTrue(all(G.is_agent_node(v) for v in cycles[0][::2]))

  def test_cycles_are_disjoint(self):
    rng = np.random.default_rng(7)
    for _ in range(20):
      G = PointerGraph(num_agents=8, num_objects=6)
      for a in range(8):
        if rng.random() < 0.8:
          G.point_agent(a, int(rng.integers(6)))
      for o in range(6):
        if rng.random() < 0.8:
          G.point_object(o, int(rng.integers(8)))
      seen = set()
      for cycle in G.find_cycles():
        self.assertEqual(len(cycle) % 2, 0)
        for i, v in enumerate(cycle):
          self.assertNotIn(v, seen)
          seen.add(v)
          self.assertEqual(G.successors[v], cycle[(i + 1) % len(cycle)])


if __name__ == '__main__':
  unittest.main()
