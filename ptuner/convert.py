# -*- coding: utf-8 -*-

'''
convert.py

Converting between pitch (semitones away from the reference note),
phase (samples in one cycle of a tone) and frequency (Hz).

https://en.wikipedia.org/wiki/Musical_note#Note_frequency_.28hertz.29

All of these take the tuner configuration, which supplies the
reference frequency and the sample rate.
'''

import math

import numpy


CENTS_PER_SEMITONE = 100


def phase(pitch, config):
    '''
    Computes the phase (the number of samples in one cycle) of the
    tone `pitch` semitones away from the reference.

    f = 2^(n/12) x 440 Hz, and there are RATE / f samples per cycle.

    Arguments:
    - `pitch`: an integer number of semitones from A4
    - `config`: a TunerConfig
    '''
    samples = config.sample_rate / config.reference / numpy.exp2(pitch / 12.)
    # round half away from zero
    return int(math.floor(samples + 0.5))

def fractional_pitch(phase, config):
    '''
    Converts a phase back into a (fractional) number of semitones away
    from the reference.  This is the inverse of `phase()`, and accepts
    a fractional phase, e.g. an average of several phases.

    Rounding the result gives the nearest pitch; the rest is positive
    if the tone is sharp of that pitch and negative if it is flat.

    n = log_{2^(1/12)} (RATE / (phase x 440 Hz))

    Arguments:
    - `phase`: samples per cycle, greater than zero
    - `config`: a TunerConfig
    '''
    return float(12 * numpy.log2(config.sample_rate /
                                 (float(phase) * config.reference)))

def nearest_pitch(phase, config):
    '''
    Finds the pitch closest to `phase`, and how far off it the phase
    is, in cents.  Returns (pitch, cents).
    '''
    offset = fractional_pitch(phase, config)
    pitch = int(math.floor(offset + 0.5))
    return pitch, (offset - pitch) * CENTS_PER_SEMITONE

def hertz(phase, config):
    '''
    The frequency in Hz of a tone with the given phase.
    '''
    return config.sample_rate / float(phase)

def pitch_hertz(pitch, config):
    '''
    The exact frequency in Hz of the tone `pitch` semitones away from
    the reference.
    '''
    return float(config.reference * numpy.exp2(pitch / 12.))
