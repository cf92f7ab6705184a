# -*- coding: utf-8 -*-

'''
session.py

The tuning loop: pull a window of samples from a source, work out its
phase, pitch and closest target string, and hand the result to a
display.
'''

import collections
import logging

import numpy
import scipy.signal

from .autocorr import best_phase
from .config import target_table
from .convert import hertz, nearest_pitch
from .errors import OutOfRange, PrecondViolation
from .matcher import closest_target
from .notes import format_note

logger = logging.getLogger(__name__)

# number of taps in the low-pass FIR filter
LOWPASS_TAPS = 101

Reading = collections.namedtuple(
    'Reading', ['phase', 'frequency', 'pitch', 'cents', 'note', 'target'])
Reading.__doc__ = '''
The analysis of one window.

- `phase`: samples per cycle of the detected tone
- `frequency`: frequency of the detected tone in Hz
- `pitch`: nearest pitch, in semitones from the reference
- `cents`: how sharp (+) or flat (-) the tone is of `pitch`
- `note`: the name of `pitch`, or None if it has no printable name
- `target`: index into the configuration's targets of the closest one
'''


def analyse_window(samples, config, table=None):
    '''
    Runs the whole pitch detection on one window of samples.

    Arguments:
    - `samples`: a vector of config.window_length 16-bit samples
    - `config`: a TunerConfig
    - `table`: the configuration's TargetTable, if already computed
    '''
    if table is None:
        table = target_table(config)
    phase = best_phase(samples, config.phase_min, config.phase_max)
    pitch, cents = nearest_pitch(phase, config)
    try:
        note = format_note(pitch)
    except OutOfRange:
        note = None
    return Reading(phase, hertz(phase, config), pitch, cents, note,
                   closest_target(phase, table))

def lowpass_filter(samples, cutoff, sample_rate, numtaps=LOWPASS_TAPS):
    '''
    Low-pass filters a block of 16-bit samples with a hamming-windowed
    FIR filter, returning 16-bit samples again.

    The filter is run forwards and backwards over the block, starting
    from the steady state of an odd extension at each end, so the block
    comes out without a start-up ramp or a delay.  The block must be
    longer than three times the filter.

    Arguments:
    - `samples`: a vector of 16-bit samples
    - `cutoff`: the cutoff frequency in Hz
    - `sample_rate`: samples per second
    - `numtaps`: the length of the filter
    '''
    nyquist = 0.5 * sample_rate
    if not 0 < cutoff < nyquist:
        raise PrecondViolation(
            'Low-pass cutoff must lie between 0 and {} Hz, not {}'.format(nyquist, cutoff))
    samples = numpy.asarray(samples, dtype=numpy.float64)
    if len(samples) <= 3 * numtaps:
        raise PrecondViolation(
            'Need more than {} samples to low-pass filter, got {}'.format(
                3 * numtaps, len(samples)))
    taps = scipy.signal.firwin(numtaps, cutoff / nyquist, window='hamming')
    filtered = scipy.signal.filtfilt(taps, 1, samples)
    info = numpy.iinfo(numpy.int16)
    return numpy.clip(numpy.round(filtered), info.min, info.max).astype(numpy.int16)

def run_session(config, source, display, max_windows=None, lowpass=None):
    '''
    Main tuning loop.  Reads windows from `source` until it runs out
    or `max_windows` windows have been analysed, showing a Reading for
    each on `display`.  Returns the number of windows analysed.

    A window of the wrong length means the source is broken, and ends
    the session with PrecondViolation.

    Arguments:
    - `config`: a TunerConfig
    - `source`: has a read_window(n) method returning n samples
    - `display`: has a show(reading, samples) method
    - `max_windows`: stop after this many windows; None to keep going
    - `lowpass`: cutoff frequency (Hz) to filter windows at, or None
    '''
    table = target_table(config)
    length = config.window_length
    logger.debug('Analysing windows of %d samples, phases %d - %d',
                 length, config.phase_min, config.phase_max)
    count = 0
    while max_windows is None or count < max_windows:
        try:
            samples = source.read_window(length)
        except (StopIteration, EOFError):
            logger.debug('Sample source exhausted after %d windows', count)
            break
        if len(samples) != length:
            raise PrecondViolation(
                'Expected a window of {} samples, got {}'.format(length, len(samples)))
        if lowpass is not None:
            samples = lowpass_filter(samples, lowpass, config.sample_rate)
        display.show(analyse_window(samples, config, table), samples)
        count += 1
    return count
