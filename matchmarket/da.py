"""Deferred Acceptance (Gale-Shapley) algorithm."""

import numpy as np

import matchmarket.core
from matchmarket.errors import ConfigurationError
from matchmarket.instance import TwoSidedMarket
from matchmarket.matching import Matching

__all__ = ["gale_shapley", "deferred_acceptance"]


def _propose(market):
  """Runs agent-proposing deferred acceptance on a validated market."""
  prefs, lengths = matchmarket.core.pad_prefs(market.agent_prefs)
  resp_ranks = market.object_ranks()
  prop_matches, seats, offsets, num_proposals = (
      matchmarket.core.deferred_acceptance_kernel(
          prefs, lengths, resp_ranks, market.object_caps))

  resp_matches = [
      sorted(int(p) for p in seats[offsets[r]:offsets[r + 1]] if p >= 0)
      for r in range(market.num_objects)
  ]
  prop_matches = [int(r) if r >= 0 else None for r in prop_matches]
  return prop_matches, resp_matches, int(num_proposals)


def gale_shapley(prop_prefs, resp_prefs, resp_caps=None):
  """Compute a stable matching by the deferred acceptance algorithm.

  Single proposers propose to their next preferred respondent. A respondent
  holds the best proposers it has received so far, up to its capacity, and
  rejects the others. The procedure stops when no proposer is single.

  Args:
    prop_prefs: list of preference lists of proposers over respondent IDs.
    resp_prefs: list of preference lists of respondents over proposer IDs.
    resp_caps: optional list of respondent capacities, default all 1.

  Returns:
    prop_matches: list, `prop_matches[p]` is the respondent matched with
      proposer `p`, or None.
    resp_matches: list, `resp_matches[r]` is the sorted list of proposers
      matched with respondent `r`.
    num_proposals: total number of proposals made.
  """
  market = TwoSidedMarket(prop_prefs, resp_prefs, object_caps=resp_caps)
  return _propose(market)


def deferred_acceptance(market, inverse=False, verbose=False):
  """Compute the proposer-optimal stable matching of a two-sided market.

  Args:
    market: a `TwoSidedMarket`. Proposers must all have capacity 1.
    inverse: bool, optional
      If True, objects propose to agents. Otherwise agents propose to
      objects. Default is False.
    verbose: bool, optional
      If set to True, a summary is printed. Default is False.

  Returns:
    A `Matching` between `market.num_agents` agents and `market.num_objects`
    objects, with `num_proposals` set.

  Raises:
    ConfigurationError: some proposer has a capacity other than 1.
  """
  roles = market.inverse() if inverse else market
  if np.any(roles.agent_caps != 1):
    raise ConfigurationError(
        "Deferred acceptance requires every proposer to have capacity 1.")

  prop_matches, _, num_proposals = _propose(roles)

  matching = Matching(roles.num_agents, roles.num_objects)
  for p, r in enumerate(prop_matches):
    if r is not None:
      matching.add(p, r)
  matching.num_proposals = num_proposals
  if verbose:
    print("{0} proposals, {1} of {2} proposers matched.".format(
        num_proposals, len(matching), roles.num_agents))

  if inverse:
    matching = matching.transpose()
  return matching
