# -*- coding: utf-8 -*-

'''
matcher.py

Finding which of the configured targets a detected phase is closest
to.  Works on phases only, so a string played an octave off is not
recognised as that string.
'''

import bisect

from .errors import PrecondViolation


def closest(value, targets):
    '''
    Finds the index of the element of `targets` closest to `value`.

    If `value` equals one or more elements, the lowest index of those
    is returned.  A value exactly halfway between two elements goes to
    the lower one.  Values off either end go to the first or last
    element.

    >>> closest(-21, [-29, -24, -19, -14, -10, -5])
    2
    >>> closest(100, [-29, -24, -19, -14, -10, -5])
    5

    Arguments:
    - `value`: the number to look up
    - `targets`: a non-empty sequence sorted in ascending order
    '''
    if not len(targets):
        raise PrecondViolation('Cannot match against an empty list of targets')
    idx = bisect.bisect_left(targets, value)
    if idx == 0:
        return 0
    if idx == len(targets):
        return idx - 1
    if abs(targets[idx] - value) < abs(targets[idx - 1] - value):
        return idx
    return idx - 1

def closest_target(phase, table):
    '''
    Finds the configured target whose phase is closest to `phase`, and
    returns its index in the configuration's (ascending pitch) targets.

    Arguments:
    - `phase`: a detected phase
    - `table`: a TargetTable, as built by `config.target_table()`
    '''
    return table.target_index(closest(phase, table.phases))
