# -*- coding: utf-8 -*-

'''
display.py

Showing readings to the person tuning: a line of text per reading on
the console, or an interactive matplotlib window.
'''

import collections
import sys

import matplotlib.pyplot as plt
import numpy

from .autocorr import error_curve
from .config import target_table
from .convert import pitch_hertz
from .notes import format_note

# number of past readings shown in the plot
HISTORY_LENGTH = 100


def tuning_hint(reading, table):
    '''
    Says which way to turn the closest string's tuning peg.  A longer
    phase than the string's means a lower frequency.
    '''
    target_phase = table.phases[table.indices.index(reading.target)]
    if reading.phase == target_phase:
        return 'in tune'
    elif reading.phase > target_phase:
        return 'flat, tune up'
    return 'sharp, tune down'

def format_reading(reading, config, table=None):
    '''
    Formats a reading as a single line of text.

    Arguments:
    - `reading`: a session.Reading
    - `config`: the TunerConfig the reading was made with
    - `table`: the configuration's TargetTable, if already computed
    '''
    if table is None:
        table = target_table(config)
    return ('Phase: {:4d}  Freq: {:7.2f} Hz  Note: {:<3} {:+6.1f} cents  '
            'String: {} ({})'.format(
                reading.phase, reading.frequency,
                reading.note if reading.note is not None else '?',
                reading.cents,
                format_note(config.targets[reading.target]),
                tuning_hint(reading, table)))


class ConsoleDisplay(object):
    '''
    Prints one line per reading.
    '''

    def __init__(self, config, stream=None):
        self.config = config
        self.table = target_table(config)
        self.stream = stream if stream is not None else sys.stdout

    def show(self, reading, samples=None):
        print(format_reading(reading, self.config, self.table), file=self.stream)
        self.stream.flush()


class PlotDisplay(object):
    '''
    A tuner running inside matplotlib.  Shows the current reading, the
    recent history of detected frequencies against the target strings,
    and the autocorrelation error of each phase in the current window.
    '''

    def __init__(self, config, history=HISTORY_LENGTH):
        self.config = config
        self.freqs = collections.deque(maxlen=history)
        self.phases = numpy.arange(config.phase_min, config.phase_max)
        # set interactive matplotlib and clear the figure
        plt.ion()
        plt.clf()
        plt.gcf().canvas.manager.set_window_title('Tuner')

    def show(self, reading, samples=None):
        self.freqs.append(reading.frequency)
        plt.clf()

        # Text
        plt.subplot(311)
        plt.axis('off')
        plt.text(0.5, 0.5,
                 'Freq: {:.1f} Hz\n'
                 'Note: {}\n'
                 'String: {}'.format(
                     reading.frequency,
                     reading.note if reading.note is not None else '?',
                     format_note(self.config.targets[reading.target])),
                 horizontalalignment='center',
                 verticalalignment='center')

        # Frequency history, with the strings as horizontal lines
        plt.subplot(312)
        for (index, pitch) in enumerate(self.config.targets):
            color = 'g' if index == reading.target else '0.75'
            plt.axhline(pitch_hertz(pitch, self.config), color=color, linestyle=':')
        plt.plot(numpy.arange(len(self.freqs)), list(self.freqs), 'k')
        plt.gca().xaxis.set_ticks([]) # remove x ticks
        plt.ylabel('Frequency (Hz)')

        # Autocorrelation error of each candidate phase
        if samples is not None:
            plt.subplot(313)
            plt.plot(self.phases,
                     error_curve(samples, self.config.phase_min, self.config.phase_max))
            plt.axvline(reading.phase, color='r')
            plt.xlabel('Phase (samples)')
            plt.ylabel('Error')

        plt.draw()
        plt.pause(0.01)
