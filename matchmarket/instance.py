"""Matching market instances.

Containers for the inputs of the matching mechanisms: two-sided and one-sided
markets, priority orders over agents and initial ownership of objects.

All IDs are 0-based. A preference list is ordered from the most preferred to
the least preferred partner, and `None` stands for "remain unmatched": entries
after the first `None` are unacceptable and are discarded on construction.
"""

import numpy as np
from scipy import sparse as sp

import matchmarket.core
from matchmarket.errors import ConfigurationError, DimensionMismatchError

__all__ = [
    "UNMATCHED", "TwoSidedMarket", "OneSidedMarket", "Priority", "Ownership"
]

UNMATCHED = None


def _acceptable_part(li):
  """Cut a preference list at the first unmatched sentinel."""
  out = []
  for x in li:
    if x is UNMATCHED:
      break
    out.append(x)
  return out


def _is_id(x):
  return isinstance(x, (int, np.integer)) and not isinstance(x, bool)


def _check_pref_lists(pref_lists, num_candidates, side):
  """Validate preference lists and return them as lists of python ints."""
  checked = []
  for i, li in enumerate(pref_lists):
    for x in li:
      if not _is_id(x):
        raise ConfigurationError(
            "Preference list of {0} {1} contains {2!r}, which is not an "
            "ID.".format(side, i, x))
      if not 0 <= x < num_candidates:
        raise ConfigurationError(
            "Preference list of {0} {1} refers to {2}, out of range "
            "[0, {3}).".format(side, i, x, num_candidates))
    li = [int(x) for x in li]
    if len(li) != len(set(li)):
      raise ConfigurationError(
          "Preference list of {0} {1} has duplicate entries.".format(side, i))
    checked.append(li)
  return checked


def _make_caps(caps, size, side):
  """Validate a capacity vector; defaults to unit capacities."""
  if caps is None:
    return np.ones(size, dtype=np.int64)
  caps = np.asarray(caps).reshape(-1)
  if caps.size > 0 and caps.dtype.kind not in "iu":
    raise ConfigurationError(
        "Capacities of {0}s must be integers.".format(side))
  caps = caps.astype(np.int64)
  if len(caps) != size:
    raise DimensionMismatchError(
        "Got {0} capacities for {1} {2}s.".format(len(caps), size, side))
  if np.any(caps < 0):
    raise ConfigurationError(
        "Capacities of {0}s must be non-negative.".format(side))
  return caps


class TwoSidedMarket():
  """Two-sided matching market.

  Both sides hold preferences over each other, as students and schools do in
  school choice. Which side is called "agents" only matters to the mechanisms
  through their `inverse` argument.

  Attributes:
    num_agents: Number of agents.
    num_objects: Number of objects.
    agent_prefs: `agent_prefs[a]` is the list of acceptable objects of agent
      `a`, most preferred first.
    object_prefs: `object_prefs[o]` is the list of acceptable agents of object
      `o`, most preferred first.
    agent_caps: int array, number of objects each agent can be matched with.
    object_caps: int array, number of agents each object can be matched with.
  """
  def __init__(self, agent_prefs, object_prefs, agent_caps=None,
               object_caps=None):
    """
    Args:
      agent_prefs: list of preference lists of agents over object IDs.
      object_prefs: list of preference lists of objects over agent IDs.
      agent_caps: optional list of agent capacities, default all 1.
      object_caps: optional list of object capacities, default all 1.

    Raises:
      ConfigurationError: a list has an invalid or duplicate ID, or a
        capacity is negative or not an integer.
      DimensionMismatchError: a capacity vector has the wrong length.
    """
    self.num_agents = len(agent_prefs)
    self.num_objects = len(object_prefs)
    self.agent_prefs = _check_pref_lists(
        [_acceptable_part(li) for li in agent_prefs], self.num_objects,
        "agent")
    self.object_prefs = _check_pref_lists(
        [_acceptable_part(li) for li in object_prefs], self.num_agents,
        "object")
    self.agent_caps = _make_caps(agent_caps, self.num_agents, "agent")
    self.object_caps = _make_caps(object_caps, self.num_objects, "object")

  def __repr__(self):
    return "<TwoSidedMarket with {a} agents and {o} objects>".format(
        a=self.num_agents, o=self.num_objects)

  def inverse(self):
    """Returns the same market with the roles of agents and objects swapped."""
    return TwoSidedMarket(
        agent_prefs=self.object_prefs, object_prefs=self.agent_prefs,
        agent_caps=self.object_caps, object_caps=self.agent_caps)

  def agent_ranks(self):
    """Rank matrix of agents over objects, see `core.prefs_to_ranks`."""
    return matchmarket.core.prefs_to_ranks(self.agent_prefs, self.num_objects)

  def object_ranks(self):
    """Rank matrix of objects over agents, see `core.prefs_to_ranks`."""
    return matchmarket.core.prefs_to_ranks(self.object_prefs, self.num_agents)

  def acceptables(self):
    """Obtains the acceptability table of the objects.

    Returns:
      (num_agents, num_objects) boolean array, entry `[a, o]` is True iff
      agent `a` appears in the preference list of object `o`.
    """
    ranks = self.object_ranks()
    n = self.num_agents
    return (ranks[:, :n] < ranks[:, n:n + 1]).T


class OneSidedMarket():
  """One-sided matching market.

  Only agents have preferences; objects (e.g. houses) are passive.

  Attributes:
    num_agents: Number of agents.
    num_objects: Number of objects.
    agent_prefs: `agent_prefs[a]` is the list of acceptable objects of agent
      `a`, most preferred first.
    agent_caps: int array of agent capacities.
    object_caps: int array of object capacities.
  """
  def __init__(self, agent_prefs, num_objects, agent_caps=None,
               object_caps=None):
    self.num_agents = len(agent_prefs)
    self.num_objects = int(num_objects)
    self.agent_prefs = _check_pref_lists(
        [_acceptable_part(li) for li in agent_prefs], self.num_objects,
        "agent")
    self.agent_caps = _make_caps(agent_caps, self.num_agents, "agent")
    self.object_caps = _make_caps(object_caps, self.num_objects, "object")

  def __repr__(self):
    return "<OneSidedMarket with {a} agents and {o} objects>".format(
        a=self.num_agents, o=self.num_objects)

  def agent_ranks(self):
    """Rank matrix of agents over objects, see `core.prefs_to_ranks`."""
    return matchmarket.core.prefs_to_ranks(self.agent_prefs, self.num_objects)


class Priority():
  """Order in which agents are served by one-sided TTC.

  Attributes:
    order: list of agent IDs, highest priority first.
  """
  def __init__(self, order):
    order = list(order)
    if not all(_is_id(a) for a in order):
      raise ConfigurationError("Priority entries must be agent IDs.")
    self.order = [int(a) for a in order]
    if sorted(self.order) != list(range(len(self.order))):
      raise ConfigurationError(
          "Priority must list every agent exactly once.")

  def __len__(self):
    return len(self.order)

  def __iter__(self):
    return iter(self.order)

  def __repr__(self):
    return "<Priority over {0} agents>".format(len(self.order))


class Ownership():
  """Initial ownership of objects by agents.

  Attributes:
    num_agents: declared number of agents.
    num_objects: declared number of objects.
    owners: (num_agents, num_objects) sparse boolean matrix, `owners[a, o]` is
      True iff agent `a` initially owns object `o`.
  """
  def __init__(self, num_agents, num_objects, pairs=()):
    """
    Args:
      num_agents: number of agents.
      num_objects: number of objects.
      pairs: iterable of `(agent, object)` ownership pairs.
    """
    self.num_agents = int(num_agents)
    self.num_objects = int(num_objects)
    self.owners = sp.lil_matrix((self.num_agents, self.num_objects),
                                dtype=bool)
    for a, o in pairs:
      if not (0 <= a < self.num_agents and 0 <= o < self.num_objects):
        raise DimensionMismatchError(
            "Ownership pair ({0}, {1}) out of range.".format(a, o))
      self.owners[a, o] = True

  @classmethod
  def from_matrix(cls, matrix):
    """Creates an `Ownership` from a dense or sparse agent x object matrix."""
    coo = sp.coo_matrix(matrix)
    num_agents, num_objects = coo.shape
    pairs = [(int(a), int(o)) for a, o, v in zip(coo.row, coo.col, coo.data)
             if v]
    return cls(num_agents, num_objects, pairs)

  def __repr__(self):
    return "<Ownership of {o} objects by {a} agents, {n} owned>".format(
        o=self.num_objects, a=self.num_agents, n=self.owners.nnz)

  def pairs(self):
    """Returns the sorted list of `(agent, object)` ownership pairs."""
    coo = self.owners.tocoo()
    return sorted(zip(coo.row.tolist(), coo.col.tolist()))

  def owners_per_object(self):
    """Returns an int array with the number of owners of each object."""
    return np.asarray(self.owners.sum(axis=0)).reshape(-1)

  def objects_per_agent(self):
    """Returns an int array with the number of objects each agent owns."""
    return np.asarray(self.owners.sum(axis=1)).reshape(-1)

  def toarray(self):
    return self.owners.toarray()
