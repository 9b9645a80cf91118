"""Result of a matching mechanism."""

import numpy as np
from scipy import sparse as sp

__all__ = ["Matching"]


class Matching():
  """An assignment of agents to objects.

  Pairs are only ever added, never removed. One can directly access this
  object to obtain the result, e.g. for a `Matching` m:
    `m[(o, a)]` is True iff object `o` is matched with agent `a`.
    `m["a3"]` or `m.agent_partners(3)` is the sorted list of objects matched
      with agent 3.
    `m["o2"]` or `m.object_partners(2)` is the sorted list of agents matched
      with object 2.

  Attributes:
    num_agents: number of agents.
    num_objects: number of objects.
    matrix: (num_objects, num_agents) sparse boolean matrix of matched pairs.
    rounds: list, one entry per round of the mechanism that committed pairs,
      each entry being the list of `(agent, object)` pairs it committed.
    num_rounds: number of rounds the mechanism ran.
    num_proposals: number of proposals made (deferred acceptance only).
  """
  def __init__(self, num_agents, num_objects):
    self.num_agents = num_agents
    self.num_objects = num_objects
    self.matrix = sp.lil_matrix((num_objects, num_agents), dtype=bool)
    self.rounds = []
    self.num_rounds = 0
    self.num_proposals = 0

  def __repr__(self):
    return "<Matching of {a} agents and {o} objects with {n} pairs>".format(
        a=self.num_agents, o=self.num_objects, n=len(self))

  def __len__(self):
    return self.matrix.nnz

  def __getitem__(self, key):
    if isinstance(key, tuple):
      o, a = key
      return bool(self.matrix[o, a])
    elif isinstance(key, str):
      if key.startswith("a"):
        return self.agent_partners(int(key[1:]))
      elif key.startswith("o"):
        return self.object_partners(int(key[1:]))
    raise TypeError("Unrecognized index.")

  def add(self, agent, obj):
    """Records that `agent` is matched with `obj`."""
    self.matrix[obj, agent] = True

  def agent_partners(self, a):
    return sorted(self.matrix[:, a].nonzero()[0].tolist())

  def object_partners(self, o):
    return list(self.matrix.rows[o])

  def agent_matches(self):
    """Returns a list with the first partner of each agent, or None."""
    partners = [[] for _ in range(self.num_agents)]
    for a, o in self.pairs():
      partners[a].append(o)
    return [li[0] if li else None for li in partners]

  def object_matches(self):
    """Returns a list with the first partner of each object, or None."""
    return [li[0] if li else None for li in self.matrix.rows]

  def pairs(self):
    """Returns the sorted list of matched `(agent, object)` pairs."""
    coo = self.matrix.tocoo()
    return sorted(zip(coo.col.tolist(), coo.row.tolist()))

  def agent_counts(self):
    """Returns an int array with the number of partners of each agent."""
    return np.asarray(self.matrix.sum(axis=0)).reshape(-1)

  def object_counts(self):
    """Returns an int array with the number of partners of each object."""
    return np.asarray(self.matrix.sum(axis=1)).reshape(-1)

  def toarray(self):
    return self.matrix.toarray()

  def transpose(self):
    """Returns the same matching with agents and objects swapped."""
    t = Matching(self.num_objects, self.num_agents)
    t.matrix = self.matrix.T.tolil()
    t.rounds = [[(o, a) for a, o in r] for r in self.rounds]
    t.num_rounds = self.num_rounds
    t.num_proposals = self.num_proposals
    return t
