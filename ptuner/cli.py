#!/usr/bin/env python
# -*- coding: utf-8 -*-

'''
cli.py

Command line interface: a tuner that listens to the microphone, and a
few helpers around it.  Run `ptuner listen` and press Ctrl-C to quit.
'''

import argparse
import logging
import sys

from .audio import (ArraySource, MicrophoneSource, list_devices,
                    play_samples, read_wav, sine_wave)
from .autocorr import average_phase
from .config import A4, MAX_FREQ, MIN_FREQ, SAMPLE_RATE, TunerConfig, target_table
from .convert import hertz, nearest_pitch, pitch_hertz
from .display import ConsoleDisplay, PlotDisplay
from .errors import OutOfRange, PrecondViolation, TunerError
from .notes import STANDARD_TUNING, TUNINGS, format_note, format_tuning, parse_note
from .session import lowpass_filter, run_session

logger = logging.getLogger(__name__)

# exit statuses
EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1


def resolve_tuning(tuning):
    '''
    Looks up named tunings like "guitar"; anything else is taken to be
    a list of note names.

    >>> resolve_tuning('bass')
    'E1 A1 D2 G2'
    >>> resolve_tuning('D2 A2')
    'D2 A2'
    '''
    return TUNINGS.get(tuning.strip().lower(), tuning)

def make_config(parser, args, sample_rate=None):
    '''
    Builds the TunerConfig described by the command line arguments.
    Bad settings end the program with a usage message.
    '''
    try:
        return TunerConfig.from_tuning(resolve_tuning(args.tuning),
                                       reference=args.reference,
                                       sample_rate=sample_rate or args.rate,
                                       min_freq=args.min_freq,
                                       max_freq=args.max_freq)
    except TunerError as exc:
        parser.error(str(exc))

def add_config_arguments(parser):
    parser.add_argument('-t', '--tuning', default=STANDARD_TUNING,
                        help='notes to tune to, or one of {} (default: "%(default)s")'.format(
                            ', '.join(sorted(TUNINGS))))
    parser.add_argument('-r', '--reference', type=float, default=A4,
                        help='frequency of A4 in Hz (default: %(default)s)')
    parser.add_argument('--rate', type=int, default=SAMPLE_RATE,
                        help='sample rate in Hz (default: %(default)s)')
    parser.add_argument('--min-freq', type=float, default=MIN_FREQ,
                        help='lowest frequency to detect (default: %(default)s)')
    parser.add_argument('--max-freq', type=float, default=MAX_FREQ,
                        help='highest frequency to detect (default: %(default)s)')

def cmd_listen(parser, args):
    config = make_config(parser, args)
    display = PlotDisplay(config) if args.plot else ConsoleDisplay(config)
    logger.info('Tuning to %s', format_tuning(config.targets))
    with MicrophoneSource(config.sample_rate, device=args.device) as source:
        print('Press Ctrl-C to quit ...')
        try:
            count = run_session(config, source, display,
                                max_windows=args.count, lowpass=args.lowpass)
        except KeyboardInterrupt:
            print()
            print('* done recording')
            return EXIT_OK
    logger.info('Analysed %d windows', count)
    return EXIT_OK

def cmd_analyse(parser, args):
    sample_rate, samples = read_wav(args.path)
    config = make_config(parser, args, sample_rate=sample_rate)
    length = config.window_length
    if len(samples) < length:
        raise PrecondViolation('{} is too short: {} samples, need at least {}'.format(
            args.path, len(samples), length))
    if args.lowpass is not None:
        # the whole recording at once, so windows and average see the same signal
        samples = lowpass_filter(samples, args.lowpass, sample_rate)
    count = run_session(config, ArraySource(samples), ConsoleDisplay(config))
    mean_phase = average_phase(samples, range(0, len(samples) - length + 1, length),
                               config.phase_min, config.phase_max)
    pitch, cents = nearest_pitch(mean_phase, config)
    try:
        note = format_note(pitch)
    except OutOfRange:
        note = '?'
    print('Average over {} windows: phase {:.2f}, {:.2f} Hz, {} {:+.1f} cents'.format(
        count, mean_phase, hertz(mean_phase, config), note, cents))
    return EXIT_OK

def cmd_tone(parser, args):
    try:
        pitch = parse_note(args.note)
        config = TunerConfig.from_tuning(args.note, reference=args.reference,
                                         sample_rate=args.rate)
    except TunerError as exc:
        parser.error(str(exc))
    freq = pitch_hertz(pitch, config)
    print('Playing {} ({:.2f} Hz) for {} s'.format(format_note(pitch), freq, args.seconds))
    play_samples(sine_wave(freq, config.sample_rate, int(args.seconds * config.sample_rate)),
                 config.sample_rate, device=args.device)
    return EXIT_OK

def cmd_phases(parser, args):
    config = make_config(parser, args)
    table = target_table(config)
    print('Tuning: {}'.format(format_tuning(config.targets)))
    print('Search range: phases {} - {} ({:.1f} - {:.1f} Hz)'.format(
        config.phase_min, config.phase_max - 1,
        hertz(config.phase_max - 1, config), hertz(config.phase_min, config)))
    for (pitch, phase) in zip(table.pitches, table.phases):
        print('{:<4} pitch {:4d}  phase {:5d}  {:8.2f} Hz'.format(
            format_note(pitch), pitch, phase, pitch_hertz(pitch, config)))
    return EXIT_OK

def cmd_devices(parser, args):
    for (index, name, inputs, outputs) in list_devices():
        print('{:3d}  {}  (in: {}, out: {})'.format(index, name, inputs, outputs))
    return EXIT_OK

def build_parser():
    parser = argparse.ArgumentParser(
        prog='ptuner',
        description='An autocorrelation tuner for stringed instruments.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print debugging output')
    subparsers = parser.add_subparsers(dest='command')

    listen = subparsers.add_parser('listen', help='tune from the microphone')
    add_config_arguments(listen)
    listen.add_argument('-d', '--device', type=int, default=None,
                        help='input device index (see `ptuner devices`)')
    listen.add_argument('--lowpass', type=float, default=None, metavar='HZ',
                        help='low-pass filter the input at this frequency')
    listen.add_argument('--plot', action='store_true',
                        help='show readings in a matplotlib window')
    listen.add_argument('-n', '--count', type=int, default=None,
                        help='stop after this many readings')
    listen.set_defaults(func=cmd_listen)

    analyse = subparsers.add_parser('analyse', help='analyse a WAV recording')
    add_config_arguments(analyse)
    analyse.add_argument('path', help='the WAV file')
    analyse.add_argument('--lowpass', type=float, default=None, metavar='HZ',
                         help='low-pass filter the input at this frequency')
    analyse.set_defaults(func=cmd_analyse)

    tone = subparsers.add_parser('tone', help='play a reference tone')
    tone.add_argument('note', help='the note to play, like A2')
    tone.add_argument('-s', '--seconds', type=float, default=2.,
                      help='length of the tone (default: %(default)s)')
    tone.add_argument('-r', '--reference', type=float, default=A4,
                      help='frequency of A4 in Hz (default: %(default)s)')
    tone.add_argument('--rate', type=int, default=SAMPLE_RATE,
                      help='sample rate in Hz (default: %(default)s)')
    tone.add_argument('-d', '--device', type=int, default=None,
                      help='output device index (see `ptuner devices`)')
    tone.set_defaults(func=cmd_tone)

    phases = subparsers.add_parser('phases', help='show the phases of a tuning')
    add_config_arguments(phases)
    phases.set_defaults(func=cmd_phases)

    devices = subparsers.add_parser('devices', help='list audio devices')
    devices.set_defaults(func=cmd_devices)
    return parser

def main(argv=None):
    '''
    Main program.
    '''
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')
    if args.command is None:
        # tuning is what people usually want
        args = parser.parse_args(list(argv if argv is not None else sys.argv[1:]) + ['listen'])
    try:
        return args.func(parser, args)
    except (TunerError, OSError) as exc:
        # configuration problems never get this far
        logger.error('%s', exc)
        return EXIT_RUNTIME_ERROR

if __name__ == '__main__':
    sys.exit(main())
