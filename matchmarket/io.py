"""Market input/output."""

import json
import pickle

import numpy as np
from scipy import io as sio

import matchmarket.instance

__all__ = ["save_json", "load_json", "save_pickle", "load_pickle", "save_mat"]


def _market_fields(market):
  if isinstance(market, matchmarket.instance.TwoSidedMarket):
    return {
        "type": "two_sided",
        "agent_prefs": market.agent_prefs,
        "object_prefs": market.object_prefs,
        "agent_caps": market.agent_caps.tolist(),
        "object_caps": market.object_caps.tolist()
    }
  elif isinstance(market, matchmarket.instance.OneSidedMarket):
    return {
        "type": "one_sided",
        "agent_prefs": market.agent_prefs,
        "num_objects": market.num_objects,
        "agent_caps": market.agent_caps.tolist(),
        "object_caps": market.object_caps.tolist()
    }
  raise TypeError("Cannot save {0!r}.".format(market))


def _market_from_fields(fields):
  if fields["type"] == "two_sided":
    return matchmarket.instance.TwoSidedMarket(
        agent_prefs=fields["agent_prefs"],
        object_prefs=fields["object_prefs"],
        agent_caps=fields.get("agent_caps"),
        object_caps=fields.get("object_caps")
    )
  elif fields["type"] == "one_sided":
    return matchmarket.instance.OneSidedMarket(
        agent_prefs=fields["agent_prefs"],
        num_objects=fields["num_objects"],
        agent_caps=fields.get("agent_caps"),
        object_caps=fields.get("object_caps")
    )
  raise ValueError("Unknown market type {0!r}.".format(fields["type"]))


def save_json(market, filename):
  """Save a market to json format.

  Args:
    market: a `TwoSidedMarket` or `OneSidedMarket` object.
    filename: output file name.
  """
  with open(filename, mode="w") as g:
    json.dump(_market_fields(market), g, indent=4)


def load_json(filename):
  """Read a market from a json file.

  Preference lists may contain `null` to mark the end of the acceptable
  partners.

  Args:
    filename: input json file name.
  Returns:
    A `TwoSidedMarket` or `OneSidedMarket` object.
  """
  with open(filename) as f:
    return _market_from_fields(json.load(f))


def save_pickle(market, filename):
  """Save a market to python's pickle format.

  Args:
    market: a `TwoSidedMarket` or `OneSidedMarket` object.
    filename: output file name.
  """
  with open(filename, "wb") as g:
    pickle.dump(_market_fields(market), g)


def load_pickle(filename):
  """Read a market from a python pickle file.

  Warning: As official python3 documentation has suggested, pickle format is NOT
  secure against adversarial attack. Please make sure you trust the source of the
  data file.

  Args:
    filename: pickle file name.
  Returns:
    A `TwoSidedMarket` or `OneSidedMarket` object.
  """
  with open(filename, "rb") as f:
    return _market_from_fields(pickle.load(f))


def save_mat(matching, filename):
  """Save a matching to MATLAB style .mat file.

  The matching is stored as the sparse (num_objects, num_agents) matrix "M".

  Args:
    matching: a `Matching`.
    filename: output filename with or without '.mat' extension.
  """
  sio.savemat(filename, {"M": matching.matrix.tocsc().astype(np.float64)})
