# -*- coding: utf-8 -*-

'''
ptuner

A tuner for stringed instruments.  The pitch of the sound is found by
autocorrelation: searching for the shift (the "phase", in samples) at
which the signal best matches itself.
'''

from .autocorr import average_phase, best_phase, window_error
from .config import TargetTable, TunerConfig, target_table
from .convert import fractional_pitch, hertz, nearest_pitch, phase, pitch_hertz
from .errors import InvalidNote, OutOfRange, PrecondViolation, TunerError
from .matcher import closest, closest_target
from .notes import format_note, format_tuning, parse_note, parse_tuning
from .session import Reading, analyse_window, run_session

__version__ = '0.1.0'
