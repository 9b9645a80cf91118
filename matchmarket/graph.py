"""Pointer graphs of the Top Trading Cycles mechanism.

In every round of TTC each active agent points to one object and each active
object points to one agent. The resulting directed graph has out-degree at
most one, so its cycles are vertex-disjoint and can all be found by following
successors once.
"""

__all__ = ["PointerGraph", "cycle_pairs"]


class PointerGraph():
  """Directed graph over agents and objects with at most one edge per node.

  Agents are the nodes `0, ..., num_agents - 1`, object `o` is the node
  `num_agents + o`.

  Attributes:
    num_agents: number of agent nodes.
    num_objects: number of object nodes.
    successors: list of node IDs or None, one entry per node.
  """
  def __init__(self, num_agents, num_objects):
    self.num_agents = num_agents
    self.num_objects = num_objects
    self.successors = [None] * (num_agents + num_objects)

  def __repr__(self):
    return "<PointerGraph with {a} agents, {o} objects and {e} edges>".format(
        a=self.num_agents, o=self.num_objects, e=self.num_edges())

  def num_edges(self):
    return sum(1 for s in self.successors if s is not None)

  def object_node(self, o):
    return self.num_agents + o

  def is_agent_node(self, v):
    return v < self.num_agents

  def point_agent(self, a, o):
    """Agent `a` points to object `o`."""
    self.successors[a] = self.object_node(o)

  def point_object(self, o, a):
    """Object `o` points to agent `a`."""
    self.successors[self.object_node(o)] = a

  def find_cycles(self):
    """Finds all cycles of the graph.

    Every node is visited once: a walk follows successors from an unvisited
    node until it stops at a node without successor, at a node finished by an
    earlier walk, or at a node of the current walk, in which case the tail of
    the walk from that node is a cycle.

    Returns:
      List of cycles in order of discovery. Each cycle is a list of nodes
      starting with an agent node, so that agents and objects alternate as
      agent, object, agent, object, ...
    """
    num_nodes = len(self.successors)
    done = [False] * num_nodes
    cycles = []
    for start in range(num_nodes):
      if done[start]:
        continue
      walk, position = [], {}
      v = start
      while v is not None and not done[v] and v not in position:
        position[v] = len(walk)
        walk.append(v)
        v = self.successors[v]
      if v is not None and v in position:
        cycles.append(self._rotate(walk[position[v]:]))
      for u in walk:
        done[u] = True
    return cycles

  def _rotate(self, cycle):
    """Rotates a cycle so that its first node is an agent."""
    if self.is_agent_node(cycle[0]):
      return cycle
    return cycle[1:] + cycle[:1]


def cycle_pairs(graph, cycle):
  """Pairs each agent of a cycle with the object it points to.

  Args:
    graph: the `PointerGraph` the cycle was found in.
    cycle: a cycle returned by `graph.find_cycles()`.

  Returns:
    list of `(agent, object)` tuples.
  """
  return [(cycle[i], cycle[i + 1] - graph.num_agents)
          for i in range(0, len(cycle), 2)]
