# -*- coding: utf-8 -*-

'''
config.py

The tuner's configuration: reference pitch, sample rate, the pitches
being tuned to, and the range of phases the autocorrelation searches.
'''

import collections
import math

from .convert import phase
from .errors import PrecondViolation
from .notes import STANDARD_TUNING, parse_tuning


# A4 is defined to be 440.0 Hz
A4 = 440.

# record 16-bit signed mono 44.1 KHz
SAMPLE_RATE = 44100

# autocorrelation is poor at telling octaves apart anyway, so only
# search the lowest octave: 55 Hz - 110 Hz (phases 401 - 802 at
# 44.1 KHz)
MIN_FREQ = 55.    # Hz
MAX_FREQ = 110.   # Hz


class TunerConfig(collections.namedtuple(
        'TunerConfig',
        ['reference', 'sample_rate', 'targets', 'phase_min', 'phase_max'])):
    '''
    Immutable tuner configuration.

    - `reference`: frequency of A4 in Hz
    - `sample_rate`: samples per second
    - `targets`: sorted tuple of target pitches (semitones from A4)
    - `phase_min`, `phase_max`: the half-open range of phases
      (samples per cycle) searched by the autocorrelation
    '''

    __slots__ = ()

    @classmethod
    def from_tuning(cls, tuning=STANDARD_TUNING, reference=A4,
                    sample_rate=SAMPLE_RATE, min_freq=MIN_FREQ,
                    max_freq=MAX_FREQ):
        '''
        Builds a configuration from a string of note names.

        >>> config = TunerConfig.from_tuning('E2 A2 D3 G3 B3 E4')
        >>> config.targets
        (-29, -24, -19, -14, -10, -5)
        >>> config.phase_min, config.phase_max
        (401, 802)

        Arguments:
        - `tuning`: whitespace-separated note names, like "E2 A2 D3"
        - `reference`: frequency of A4 in Hz
        - `sample_rate`: samples per second
        - `min_freq`: lowest frequency (Hz) the search should find
        - `max_freq`: highest frequency (Hz) the search should find
        '''
        if reference <= 0:
            raise PrecondViolation(
                'Reference frequency must be positive, not {}'.format(reference))
        if sample_rate <= 0:
            raise PrecondViolation(
                'Sample rate must be positive, not {}'.format(sample_rate))
        if not 0 < min_freq < max_freq:
            raise PrecondViolation(
                'Bad frequency search range {} - {} Hz'.format(min_freq, max_freq))
        targets = parse_tuning(tuning)
        phase_min = int(math.ceil(sample_rate / float(max_freq)))
        phase_max = int(math.ceil(sample_rate / float(min_freq)))
        if phase_min < 1 or phase_min >= phase_max:
            raise PrecondViolation(
                'Empty phase search range [{}, {})'.format(phase_min, phase_max))
        return cls(float(reference), int(sample_rate), targets,
                   phase_min, phase_max)

    @property
    def window_length(self):
        '''
        The number of samples the autocorrelation needs per window.
        '''
        return 2 * self.phase_max


class TargetTable(collections.namedtuple('TargetTable',
                                         ['pitches', 'phases', 'indices'])):
    '''
    The phases of a configuration's target pitches, sorted ascending
    by phase (so descending by pitch).  `indices` maps each entry back
    to its position in `TunerConfig.targets`.
    '''

    __slots__ = ()

    def target_index(self, position):
        '''
        Converts a position in this table into an index into the
        configuration's targets.
        '''
        return self.indices[position]


def target_table(config):
    '''
    Computes the target phase table for a configuration.

    >>> table = target_table(TunerConfig.from_tuning('E2 A2'))
    >>> table.phases
    (401, 535)
    >>> table.indices
    (1, 0)
    '''
    entries = sorted((phase(pitch, config), -pitch, index)
                     for index, pitch in enumerate(config.targets))
    return TargetTable(tuple(-neg_pitch for (_phase, neg_pitch, _index) in entries),
                       tuple(ph for (ph, _neg_pitch, _index) in entries),
                       tuple(index for (_phase, _neg_pitch, index) in entries))
