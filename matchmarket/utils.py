"""Checks of matchings against the markets they were computed for."""

import numpy as np

__all__ = [
    "respects_capacities", "respects_preferences", "blocking_pairs",
    "is_stable"
]


def respects_capacities(market, matching):
  """Check that nobody is matched with more partners than its capacity."""
  return bool(np.all(matching.agent_counts() <= market.agent_caps) and
              np.all(matching.object_counts() <= market.object_caps))


def respects_preferences(market, matching):
  """Check that every matched pair is acceptable to whoever has preferences.

  For a two-sided market both partners must list each other, for a one-sided
  market the agent must list the object.
  """
  object_prefs = getattr(market, "object_prefs", None)
  for a, o in matching.pairs():
    if o not in market.agent_prefs[a]:
      return False
    if object_prefs is not None and a not in object_prefs[o]:
      return False
  return True


def _wants(ranks, partners, cap, candidate, unmatched):
  """Whether someone would take `candidate`, dropping its worst partner if full.
  """
  if ranks[candidate] >= ranks[unmatched]:
    return False
  if len(partners) < cap:
    return True
  if cap == 0:
    return False
  worst = max(ranks[x] for x in partners)
  return ranks[candidate] < worst


def blocking_pairs(market, matching):
  """Finds the pairs that block a matching of a two-sided market.

  An unmatched agent-object pair blocks if both would rather be matched with
  each other, each of them either having a vacant seat or preferring the
  other to its worst current partner.

  Args:
    market: a `TwoSidedMarket`.
    matching: a `Matching` of `market`.

  Returns:
    Sorted list of blocking `(agent, object)` pairs.
  """
  agent_ranks = market.agent_ranks()
  object_ranks = market.object_ranks()
  agent_partners = [matching.agent_partners(a)
                    for a in range(market.num_agents)]
  object_partners = [matching.object_partners(o)
                     for o in range(market.num_objects)]
  blocking = []
  for a in range(market.num_agents):
    for o in market.agent_prefs[a]:
      if o in agent_partners[a]:
        continue
      if not _wants(agent_ranks[a], agent_partners[a], market.agent_caps[a],
                    o, market.num_objects):
        continue
      if _wants(object_ranks[o], object_partners[o], market.object_caps[o],
                a, market.num_agents):
        blocking.append((a, o))
  return blocking


def is_stable(market, matching):
  """Check if a matching of a two-sided market has no blocking pair."""
  return not blocking_pairs(market, matching)
