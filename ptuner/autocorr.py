# -*- coding: utf-8 -*-

'''
autocorr.py

Estimating the fundamental period ("phase") of a window of samples by
autocorrelation: compare the window with shifted copies of itself and
pick the shift with the smallest squared error.

The search range is a few hundred samples, so a direct search is fast
enough and there is no need for an FFT.  Candidate shifts are
abandoned as soon as their running error reaches the best error seen
so far, which leaves the result unchanged.

Further reading:

http://stackoverflow.com/a/5045834/1062499
http://recherche.ircam.fr/equipes/pcm/cheveign/pss/2002_JASA_YIN.pdf
'''

import numpy

from .errors import PrecondViolation


# squared differences of 16-bit samples reach 2^32, and a window of a
# thousand of them 2^42, so accumulate in 64 bits
ERROR_DTYPE = numpy.int64
MAX_ERROR = numpy.iinfo(ERROR_DTYPE).max

# number of samples compared between checks against the error limit
BLOCK_SIZE = 64


def _as_window(samples):
    samples = numpy.asarray(samples)
    if samples.ndim != 1:
        raise PrecondViolation(
            'Expected a one-dimensional window, got shape {}'.format(samples.shape))
    return samples

def _check_search_range(samples, phase_min, phase_max):
    if not 1 <= phase_min < phase_max:
        raise PrecondViolation(
            'Bad phase search range [{}, {})'.format(phase_min, phase_max))
    if len(samples) < 2 * phase_max:
        raise PrecondViolation(
            'Window of {} samples is too short; phases up to {} need {}'.format(
                len(samples), phase_max, 2 * phase_max))

def window_error(samples, offset, length, limit=None):
    '''
    Sums the squared differences between the first `length` samples
    and the `length` samples starting at `offset`.

    Stops as soon as the sum reaches `limit`, and returns the sum so
    far; this is the sum a sample-by-sample loop breaking at the limit
    would return.

    >>> window_error([0, 1, 0, 1, 0, 3], 2, 2)
    0
    >>> window_error([0, 1, 0, 1, 0, 3], 1, 4)
    4
    >>> window_error([0, 1, 0, 1, 0, 3], 1, 4, limit=2)
    2

    Arguments:
    - `samples`: a vector of 16-bit samples
    - `offset`: the shift to compare the window against
    - `length`: the number of samples to compare
    - `limit`: stop once the error reaches this; None for no limit
    '''
    samples = _as_window(samples)
    if offset < 0 or offset + length > len(samples):
        raise PrecondViolation(
            'Window of {} samples is too short for offset {} and length {}'.format(
                len(samples), offset, length))
    if limit is not None and limit > MAX_ERROR:
        limit = None
    error = ERROR_DTYPE(0)
    for start in range(0, length, BLOCK_SIZE):
        stop = min(start + BLOCK_SIZE, length)
        diffs = (samples[start:stop].astype(ERROR_DTYPE) -
                 samples[offset + start:offset + stop])
        squares = diffs * diffs
        if limit is None:
            error += squares.sum(dtype=ERROR_DTYPE)
            continue
        # the running error never decreases, so the first crossing is
        # where a sample-by-sample loop would have stopped
        running = error + numpy.cumsum(squares, dtype=ERROR_DTYPE)
        if running[-1] >= limit:
            return int(running[numpy.argmax(running >= limit)])
        error = running[-1]
    return int(error)

def phase_search(samples, phase_min, phase_max):
    '''
    Finds the phase in [phase_min, phase_max) whose shifted window
    best matches the window, and returns (phase, error).  Ties go to
    the smallest phase.

    Arguments:
    - `samples`: a vector of at least 2 * phase_max samples
    - `phase_min`: the smallest phase to consider
    - `phase_max`: one more than the largest phase to consider
    '''
    samples = _as_window(samples)
    _check_search_range(samples, phase_min, phase_max)
    best_error = window_error(samples, phase_min, phase_max)
    best = phase_min
    for offset in range(phase_min + 1, phase_max):
        error = window_error(samples, offset, phase_max, best_error)
        if error < best_error:
            best_error = error
            best = offset
    return best, best_error

def best_phase(samples, phase_min, phase_max):
    '''
    Estimates the fundamental period of `samples`, in samples.

    >>> window = numpy.tile(numpy.array([0, 9, 3, -7, 2], dtype=numpy.int16), 4)
    >>> best_phase(window, 3, 8)
    5
    '''
    return phase_search(samples, phase_min, phase_max)[0]

def error_curve(samples, phase_min, phase_max):
    '''
    Returns the complete (unpruned) error of every phase in
    [phase_min, phase_max), as a vector.  Slow; used for display.
    '''
    samples = _as_window(samples)
    _check_search_range(samples, phase_min, phase_max)
    return numpy.array([window_error(samples, offset, phase_max)
                        for offset in range(phase_min, phase_max)],
                       dtype=ERROR_DTYPE)

def average_phase(samples, offsets, phase_min, phase_max):
    '''
    Estimates the phase at several places in a longer recording and
    averages them, which gives a fractional phase.

    Arguments:
    - `samples`: a recording
    - `offsets`: the starting indices of the windows to analyse; each
      needs 2 * phase_max samples after it
    - `phase_min`: the smallest phase to consider
    - `phase_max`: one more than the largest phase to consider
    '''
    samples = _as_window(samples)
    if not len(offsets):
        raise PrecondViolation('Need at least one window to average')
    phases = [best_phase(samples[start:start + 2 * phase_max], phase_min, phase_max)
              for start in offsets]
    return sum(phases) / float(len(phases))
