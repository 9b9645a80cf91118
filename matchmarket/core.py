"""Compiled kernels shared by the matching mechanisms."""

import numba as nb
import numpy as np

__all__ = ["pad_prefs", "prefs_to_ranks", "deferred_acceptance_kernel"]


def pad_prefs(pref_lists):
  """Packs preference lists into a rectangular int64 array.

  Args:
    pref_lists: list of acceptable lists of IDs.

  Returns:
    prefs: (len(pref_lists), max_len) array padded with -1 on the right.
    lengths: int64 array of list lengths.
  """
  lengths = np.array([len(li) for li in pref_lists], dtype=np.int64)
  width = int(lengths.max()) if len(lengths) > 0 else 0
  prefs = np.full((len(pref_lists), width), -1, dtype=np.int64)
  for i, li in enumerate(pref_lists):
    prefs[i, :len(li)] = li
  return prefs, lengths


@nb.njit('void(int64[:,:], int64[:], int64[:,:])')
def _fill_ranks(prefs, lengths, ranks):
  """Writes 1-based ranks; the last column of `ranks` is the unmatched option."""
  unmatched = ranks.shape[1] - 1
  for i in range(prefs.shape[0]):
    for k in range(lengths[i]):
      ranks[i, prefs[i, k]] = k + 1
    ranks[i, unmatched] = lengths[i] + 1


def prefs_to_ranks(pref_lists, num_candidates):
  """Converts preference lists into a rank lookup table.

  The most preferred candidate is of rank 1, the second is 2, and so on. Being
  unmatched is ranked right after the last acceptable candidate, and every
  candidate missing from the list is ranked below being unmatched.

  Args:
    pref_lists: list of acceptable lists over `range(num_candidates)`.
    num_candidates: size of the other side of the market.

  Returns:
    (len(pref_lists), num_candidates + 1) int64 array `ranks`, where
    `ranks[i, c]` is the rank of candidate `c` for list `i` and
    `ranks[i, num_candidates]` is the rank of remaining unmatched.
  """
  prefs, lengths = pad_prefs(pref_lists)
  ranks = np.full((len(pref_lists), num_candidates + 1), num_candidates + 2,
                  dtype=np.int64)
  _fill_ranks(prefs, lengths, ranks)
  return ranks


@nb.njit
def deferred_acceptance_kernel(prop_prefs, prop_lengths, resp_ranks,
                               resp_caps):
  """Proposer-proposing deferred acceptance.

  Args:
    prop_prefs: (m, L) int64 array of padded proposer preference lists.
    prop_lengths: (m,) int64 array of list lengths.
    resp_ranks: (n, m + 1) int64 rank table of respondents, as returned by
      `prefs_to_ranks`.
    resp_caps: (n,) int64 array of respondent capacities.

  Returns:
    prop_matches: (m,) array, respondent of each proposer or -1.
    seats: (sum(resp_caps),) array of held proposers, the seats of
      respondent r are `seats[offsets[r]:offsets[r] + resp_caps[r]]`, -1 for
      vacant.
    offsets: (n + 1,) array of seat offsets.
    num_proposals: total number of proposals made.
  """
  num_props = prop_prefs.shape[0]
  num_resps = resp_ranks.shape[0]
  unmatched = resp_ranks.shape[1] - 1

  offsets = np.zeros(num_resps + 1, dtype=np.int64)
  for r in range(num_resps):
    offsets[r + 1] = offsets[r] + resp_caps[r]
  seats = np.full(offsets[num_resps], -1, dtype=np.int64)
  nums_occupied = np.zeros(num_resps, dtype=np.int64)

  is_single = np.ones(num_props, dtype=np.bool_)
  next_resp = np.zeros(num_props, dtype=np.int64)
  prop_matches = np.full(num_props, -1, dtype=np.int64)
  num_single = num_props
  num_proposals = 0

  while num_single > 0:
    for p in range(num_props):
      if not is_single[p]:
        continue
      # prefers to be unmatched over everything left
      if next_resp[p] >= prop_lengths[p]:
        is_single[p] = False
        num_single -= 1
        continue
      r = prop_prefs[p, next_resp[p]]
      next_resp[p] += 1
      num_proposals += 1

      rank_p = resp_ranks[r, p]
      if rank_p > resp_ranks[r, unmatched] or resp_caps[r] == 0:
        continue

      start = offsets[r]
      if nums_occupied[r] < resp_caps[r]:
        seats[start + nums_occupied[r]] = p
        nums_occupied[r] += 1
        is_single[p] = False
        prop_matches[p] = r
        num_single -= 1
      else:
        worst = start
        for k in range(start + 1, offsets[r + 1]):
          if resp_ranks[r, seats[k]] > resp_ranks[r, seats[worst]]:
            worst = k
        q = seats[worst]
        if rank_p < resp_ranks[r, q]:
          seats[worst] = p
          is_single[p] = False
          prop_matches[p] = r
          is_single[q] = True
          prop_matches[q] = -1

  return prop_matches, seats, offsets, num_proposals
