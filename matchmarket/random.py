"""Random Instance Generators"""

import numpy as np

import matchmarket.instance

__all__ = [
    "gen_random_two_sided_market", "gen_random_one_sided_market",
    "gen_random_priority", "gen_random_ownership"
]


def _random_pref_lists(rng, num_lists, num_candidates, pref_len):
  pref_lists = np.argsort(rng.random((num_lists, num_candidates))).tolist()
  if pref_len:
    pref_lists = [li[:pref_len] for li in pref_lists]
  return pref_lists


def _random_caps(rng, size, max_cap):
  return rng.integers(1, max_cap + 1, size=size).tolist()


def gen_random_two_sided_market(num_agents, num_objects, agent_pref_len=0,
                                object_pref_len=0, max_agent_cap=1,
                                max_object_cap=1, seed=None):
  """Generate a uniform random two-sided market.

  Every preference list is a uniformly random order of the other side,
  truncated to the requested length.

  Args:
    num_agents: int
      Number of agents.
    num_objects: int
      Number of objects.
    agent_pref_len: int, optional
      Length of agents' preference lists. Default: full preference lists.
    object_pref_len: int, optional
      Length of objects' preference lists. Default: full preference lists.
    max_agent_cap: int, optional
      Agent capacities are drawn uniformly from 1 to max_agent_cap.
      Default is 1.
    max_object_cap: int, optional
      Object capacities are drawn uniformly from 1 to max_object_cap.
      Default is 1.
    seed: optional seed of the random generator.

  Returns:
    A `TwoSidedMarket` object.
  """
  rng = np.random.default_rng(seed)
  return matchmarket.instance.TwoSidedMarket(
      agent_prefs=_random_pref_lists(rng, num_agents, num_objects,
                                     agent_pref_len),
      object_prefs=_random_pref_lists(rng, num_objects, num_agents,
                                      object_pref_len),
      agent_caps=_random_caps(rng, num_agents, max_agent_cap),
      object_caps=_random_caps(rng, num_objects, max_object_cap)
  )


def gen_random_one_sided_market(num_agents, num_objects, pref_len=0,
                                seed=None):
  """Generate a uniform random one-sided market with unit capacities.

  Args:
    num_agents: int
      Number of agents.
    num_objects: int
      Number of objects.
    pref_len: int, optional
      Length of agents' preference lists. Default: full preference lists.
    seed: optional seed of the random generator.

  Returns:
    A `OneSidedMarket` object.
  """
  rng = np.random.default_rng(seed)
  return matchmarket.instance.OneSidedMarket(
      agent_prefs=_random_pref_lists(rng, num_agents, num_objects, pref_len),
      num_objects=num_objects
  )


def gen_random_priority(num_agents, seed=None):
  """Generate a uniformly random `Priority` over the agents."""
  rng = np.random.default_rng(seed)
  return matchmarket.instance.Priority(rng.permutation(num_agents).tolist())


def gen_random_ownership(num_agents, num_objects, num_owned=None, seed=None):
  """Generate a random one-to-one `Ownership`.

  Args:
    num_agents: int
      Number of agents.
    num_objects: int
      Number of objects.
    num_owned: int, optional
      Number of owned objects. Default: as many as possible.
    seed: optional seed of the random generator.
  """
  rng = np.random.default_rng(seed)
  most = min(num_agents, num_objects)
  num_owned = most if num_owned is None else min(num_owned, most)
  owners = rng.permutation(num_agents)[:num_owned].tolist()
  objects = rng.permutation(num_objects)[:num_owned].tolist()
  return matchmarket.instance.Ownership(num_agents, num_objects,
                                        zip(owners, objects))
