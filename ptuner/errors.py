# -*- coding: utf-8 -*-

'''
errors.py

Exceptions raised by the tuner.
'''


class TunerError(Exception):
    '''
    Base class for all errors raised by ptuner.
    '''


class InvalidNote(TunerError, ValueError):
    '''
    A note name could not be interpreted.
    '''

    def __init__(self, text, reason=None):
        self.text = text
        self.reason = reason
        message = 'Could not interpret note "{}"'.format(text)
        if reason:
            message = '{}: {}'.format(message, reason)
        super(InvalidNote, self).__init__(message)


class OutOfRange(TunerError, ValueError):
    '''
    A pitch lies outside the octaves that have printable names.
    '''

    def __init__(self, pitch):
        self.pitch = pitch
        super(OutOfRange, self).__init__(
            'Pitch {} is outside the printable range (octaves 0-8)'.format(pitch))


class PrecondViolation(TunerError):
    '''
    A caller broke the contract of an operation: a short sample window,
    an empty tuning, or an impossible search range.
    '''
