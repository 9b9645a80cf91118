"""
matchmarket
=============================================
Allocating indivisible objects to agents with ordinal preferences.

Example:

Suppose that 3 students (s0, s1, s2) apply to 2 schools (h0, h1). Students
rank the schools they find acceptable, from the most preferable to the least
preferable. Student s2 would rather stay unassigned than go to h1; use None to
mark the end of the acceptable schools (or simply leave them out):
---------------------------------------------
  >>> student_pref = [[0, 1],
  ...                 [1, 0],
  ...                 [0, None, 1]]
---------------------------------------------
Schools rank the students they accept in the same way:
---------------------------------------------
  >>> school_pref = [[1, 2, 0],
  ...                [0, 1]]
  >>> school_cap = [2, 1]
---------------------------------------------
Construct the market and compute the student-proposing deferred acceptance
matching, which is stable, or the top trading cycles matching, which is
Pareto efficient for students:
---------------------------------------------
  >>> import matchmarket
  >>> M = matchmarket.TwoSidedMarket(student_pref, school_pref,
  ...                                object_caps=school_cap)
  >>> da = matchmarket.deferred_acceptance(M)
  >>> ttc = matchmarket.top_trading_cycles(M)
----------------------------------------------
Pass `inverse=True` to let schools play the role of the proposing (or
efficiency-favored) side.

For one-sided markets such as house allocation, objects have no preferences.
Agents are served in the order of a `Priority`, and an `Ownership` gives the
houses of existing tenants:
----------------------------------------------
  >>> H = matchmarket.OneSidedMarket([[1, 0], [0, 1]], num_objects=2)
  >>> tenants = matchmarket.Ownership(2, 2, [(0, 0), (1, 1)])
  >>> m = matchmarket.top_trading_cycles_one_sided(
  ...     H, matchmarket.Priority([0, 1]), tenants)
  >>> m.agent_matches()
  [1, 0]
----------------------------------------------
All mechanisms return a matchmarket.Matching object. Please refer to its
docstring to see different ways to access the result.
"""

from matchmarket.errors import *
from matchmarket.instance import *
from matchmarket.matching import *
from matchmarket.da import *
from matchmarket.ttc import *
from matchmarket.io import *
from matchmarket.random import *
