"""Top Trading Cycles.

Compute matchings of two-sided markets (school choice) and of one-sided
markets (house allocation, with or without existing tenants) with the Top
Trading Cycles algorithm.
"""

import numpy as np

from matchmarket.errors import (ConfigurationError, DimensionMismatchError,
                                OwnershipIntegrityError)
from matchmarket.graph import PointerGraph, cycle_pairs
from matchmarket.instance import Ownership
from matchmarket.matching import Matching

__all__ = ["top_trading_cycles", "top_trading_cycles_one_sided"]


class _TradingState():
  """Bookkeeping carried from one round of TTC to the next.

  Preference pointers only move forward and vacancies only decrease.

  Attributes:
    agent_vacant: remaining capacity of each agent, 0 once it left.
    object_vacant: remaining capacity of each object, 0 once it left.
    next_object_rank: index into each agent's list of the next object to
      examine.
    next_agent_rank: index into each object's list of the next agent to
      examine (two-sided markets only).
    agents_remaining: number of agents with remaining capacity.
    objects_remaining: number of objects with remaining capacity.
  """
  def __init__(self, agent_caps, object_caps):
    self.agent_vacant = np.array(agent_caps, dtype=np.int64)
    self.object_vacant = np.array(object_caps, dtype=np.int64)
    self.next_object_rank = np.zeros(len(agent_caps), dtype=np.int64)
    self.next_agent_rank = np.zeros(len(object_caps), dtype=np.int64)
    self.agents_remaining = int(np.sum(self.agent_vacant > 0))
    self.objects_remaining = int(np.sum(self.object_vacant > 0))

  def retire_agent(self, a):
    self.agent_vacant[a] = 0
    self.agents_remaining -= 1

  def retire_object(self, o):
    self.object_vacant[o] = 0
    self.objects_remaining -= 1

  def fill(self, a, o):
    """Uses up one seat of agent `a` and one of object `o`."""
    self.agent_vacant[a] -= 1
    self.object_vacant[o] -= 1
    if self.agent_vacant[a] == 0:
      self.agents_remaining -= 1
    if self.object_vacant[o] == 0:
      self.objects_remaining -= 1


def _point_agents(graph, state, agent_prefs, is_acceptable=None):
  """Lets every active agent point to its best remaining object.

  An agent skips objects without vacancy and, if `is_acceptable` is given,
  objects that do not accept it. An agent whose list is exhausted leaves the
  market without pointing anywhere.
  """
  for a, prefs in enumerate(agent_prefs):
    if state.agent_vacant[a] == 0:
      continue
    while True:
      k = state.next_object_rank[a]
      if k >= len(prefs):
        state.retire_agent(a)
        break
      o = prefs[k]
      if state.object_vacant[o] > 0 and (
          is_acceptable is None or is_acceptable[a, o]):
        graph.point_agent(a, o)
        break
      state.next_object_rank[a] += 1


def _point_objects(graph, state, object_prefs):
  """Lets every active object point to its best agent with vacancy."""
  for o, prefs in enumerate(object_prefs):
    if state.object_vacant[o] == 0:
      continue
    while True:
      k = state.next_agent_rank[o]
      if k >= len(prefs):
        state.retire_object(o)
        break
      a = prefs[k]
      if state.agent_vacant[a] > 0:
        graph.point_object(o, a)
        break
      state.next_agent_rank[o] += 1


def top_trading_cycles(market, inverse=False, verbose=False):
  """Compute a matching of a two-sided market by the TTC algorithm.

  In each round every active agent points to its most preferred object that
  still has a vacant seat and accepts it, and every active object points to
  its most preferred agent that still has a vacant seat. Each agent on a cycle
  is matched with the object it points to. Rounds repeat until no agent or no
  object is left.

  Args:
    market: a `TwoSidedMarket`.
    inverse: bool, optional
      If True, the objects of `market` play the role of agents and the
      returned matching is Pareto efficient for them. Otherwise it is Pareto
      efficient for the agents. Default is False.
    verbose: bool, optional
      If set to True, the cycles of each round are printed. Default is False.

  Returns:
    A `Matching` between `market.num_agents` agents and `market.num_objects`
    objects, whatever the value of `inverse`.
  """
  roles = market.inverse() if inverse else market
  is_acceptable = roles.acceptables()
  state = _TradingState(roles.agent_caps, roles.object_caps)
  matching = Matching(roles.num_agents, roles.num_objects)

  while state.agents_remaining > 0 and state.objects_remaining > 0:
    graph = PointerGraph(roles.num_agents, roles.num_objects)
    _point_agents(graph, state, roles.agent_prefs, is_acceptable)
    _point_objects(graph, state, roles.object_prefs)

    committed = []
    for cycle in graph.find_cycles():
      for a, o in cycle_pairs(graph, cycle):
        matching.add(a, o)
        # never examine the same partner twice
        state.next_object_rank[a] += 1
        state.next_agent_rank[o] += 1
        state.fill(a, o)
        committed.append((a, o))
    matching.num_rounds += 1
    if committed:
      matching.rounds.append(committed)
    if verbose:
      print("round #{0}: matched {1}, {2} agents and {3} objects left".format(
          matching.num_rounds, committed, state.agents_remaining,
          state.objects_remaining))

  if inverse:
    matching = matching.transpose()
  return matching


def _check_one_sided(market, priority, ownership):
  if np.any(market.agent_caps != 1) or np.any(market.object_caps != 1):
    raise ConfigurationError(
        "All capacities of agents and objects should be 1.")
  if len(priority) != market.num_agents:
    raise DimensionMismatchError(
        "Priority has {0} agents, the market has {1}.".format(
            len(priority), market.num_agents))
  if ownership.num_agents != market.num_agents:
    raise DimensionMismatchError(
        "Ownership has {0} agents, the market has {1}.".format(
            ownership.num_agents, market.num_agents))
  if ownership.num_objects != market.num_objects:
    raise DimensionMismatchError(
        "Ownership has {0} objects, the market has {1}.".format(
            ownership.num_objects, market.num_objects))
  if np.any(ownership.owners_per_object() > 1):
    raise OwnershipIntegrityError(
        "The number of owners of each object should be 0 or 1.")
  if np.any(ownership.objects_per_agent() > 1):
    raise OwnershipIntegrityError(
        "Each agent should own at most one object.")


def top_trading_cycles_one_sided(market, priority, ownership=None,
                                 verbose=False):
  """Compute a matching of a one-sided market by the TTC algorithm.

  The market is processed in one round per entry of `priority`. In the round
  of agent `p`, every active agent points to its most preferred object still
  available, every available owned object points to its owner and every
  available unowned object points to `p`. Agents on a cycle receive the
  object they point to and own it from then on, leaving the object they owned
  before unowned. Agents who never trade keep their initial object.

  Args:
    market: a `OneSidedMarket` where all capacities are 1.
    priority: a `Priority` over the agents of `market`.
    ownership: an `Ownership`, optional
      Initial ownership of the objects. If omitted, no object is owned
      (house allocation with no existing tenants).
    verbose: bool, optional
      If set to True, the cycles of each round are printed. Default is False.

  Returns:
    A `Matching` between the agents and objects of `market`.

  Raises:
    ConfigurationError: a capacity is not 1.
    DimensionMismatchError: `priority` or `ownership` does not have the size
      of the market.
    OwnershipIntegrityError: an object has several owners, or an agent owns
      several objects.
  """
  if ownership is None:
    ownership = Ownership(market.num_agents, market.num_objects)
  _check_one_sided(market, priority, ownership)

  current_possessions = [None] * market.num_agents
  current_owners = [None] * market.num_objects
  for a, o in ownership.pairs():
    current_owners[o] = a
    current_possessions[a] = o

  state = _TradingState(market.agent_caps, market.object_caps)
  rounds = []

  for prior_agent in priority:
    graph = PointerGraph(market.num_agents, market.num_objects)
    _point_agents(graph, state, market.agent_prefs)
    for o in range(market.num_objects):
      if state.object_vacant[o] > 0:
        owner = current_owners[o]
        graph.point_object(o, prior_agent if owner is None else owner)

    committed = []
    for cycle in graph.find_cycles():
      for a, o in cycle_pairs(graph, cycle):
        previous = current_possessions[a]
        if previous is not None and current_owners[previous] == a:
          current_owners[previous] = None
        current_possessions[a] = o
        current_owners[o] = a
        state.fill(a, o)
        committed.append((a, o))
    if committed:
      rounds.append(committed)
    if verbose:
      print("round of agent {0}: matched {1}".format(prior_agent, committed))

  matching = Matching(market.num_agents, market.num_objects)
  for a, o in enumerate(current_possessions):
    if o is not None:
      matching.add(a, o)
  matching.rounds = rounds
  matching.num_rounds = len(priority)
  return matching
