# -*- coding: utf-8 -*-

'''
notes.py

Music theory: converting between note names like "E2" or "F♯3" and
pitches, counted in half-steps (semitones) away from A4.
'''

from .errors import InvalidNote, OutOfRange, PrecondViolation


# map letters of notes onto number of semitone offsets from A in the
# same octave; octaves start on C, so C through G sit below A
LETTERS_TO_SEMITONES = {'C': -9,
                        'D': -7,
                        'E': -5,
                        'F': -4,
                        'G': -2,
                        'A': 0,
                        'B': 2}

# sharps, naturals and flats
ACCIDENTALS = {'#': 1,
               '♯': 1,
               '♮': 0,
               'b': -1,
               '♭': -1}

OCTAVE_DIGITS = '012345678'

# the octave containing A4 is written without a digit
REFERENCE_OCTAVE = 4

# names of the twelve semitones, starting on C
NOTE_NAMES = ['C', 'C#', 'D', 'D#', 'E', 'F',
              'F#', 'G', 'G#', 'A', 'A#', 'B']

OCTAVE_NAMES = ['0', '1', '2', '3', '', '5', '6', '7', '8']

# moves C0 (the lowest printable note) to index 0
LOWEST_PITCH_OFFSET = 57

PRINTABLE_RANGE = (-LOWEST_PITCH_OFFSET,
                   len(NOTE_NAMES) * len(OCTAVE_NAMES) - LOWEST_PITCH_OFFSET)

# open strings of some instruments, lowest string first
TUNINGS = {
    'guitar':  'E2 A2 D3 G3 B3 E4',
    'drop-d':  'D2 A2 D3 G3 B3 E4',
    'bass':    'E1 A1 D2 G2',
    'cello':   'C2 G2 D3 A3',
    'violin':  'G3 D4 A4 E5',
    'ukulele': 'C4 E4 G4 A4',
}

STANDARD_TUNING = TUNINGS['guitar']


def parse_note(text):
    '''
    Converts a note name into a number of semitones away from A4.

    A note name is a capital letter, an optional accidental and an
    optional octave digit.  Leaving off the octave means octave 4.

    >>> parse_note('A')
    0
    >>> parse_note('A4')
    0
    >>> parse_note('E2')
    -29
    >>> parse_note('C#5')
    4
    >>> parse_note('B♭3')
    -11
    >>> parse_note('H4')
    Traceback (most recent call last):
    ...
    ptuner.errors.InvalidNote: Could not interpret note "H4": unknown letter 'H'

    Arguments:
    - `text`: a string like A, Ab, A4 or F♯2
    '''
    if not text or len(text) > 3:
        raise InvalidNote(text, 'expected 1 to 3 characters')
    letter = text[0]
    if letter not in LETTERS_TO_SEMITONES:
        raise InvalidNote(text, 'unknown letter {!r}'.format(letter))
    pitch = LETTERS_TO_SEMITONES[letter]
    rest = text[1:]
    if rest and rest[0] in ACCIDENTALS:
        pitch += ACCIDENTALS[rest[0]]
        rest = rest[1:]
    if rest:
        if len(rest) != 1 or rest not in OCTAVE_DIGITS:
            raise InvalidNote(text, 'unknown accidental or octave {!r}'.format(rest))
        pitch += (int(rest) - REFERENCE_OCTAVE) * 12
    return pitch

def format_note(pitch):
    '''
    Converts a number of semitones away from A4 back into a note name.
    Notes in octave 4 are printed without their octave digit.

    >>> format_note(0)
    'A'
    >>> format_note(-29)
    'E2'
    >>> format_note(4)
    'C#5'
    >>> format_note(-57)
    'C0'

    Arguments:
    - `pitch`: an integer pitch in the range [-57, 51)
    '''
    index = pitch + LOWEST_PITCH_OFFSET
    if not 0 <= index < len(NOTE_NAMES) * len(OCTAVE_NAMES):
        raise OutOfRange(pitch)
    return NOTE_NAMES[index % 12] + OCTAVE_NAMES[index // 12]

def parse_tuning(text):
    '''
    Parses a whitespace-separated list of note names into a sorted
    tuple of distinct pitches.

    >>> parse_tuning('E2 A2 D3 G3 B3 E4')
    (-29, -24, -19, -14, -10, -5)
    >>> parse_tuning('A2 A2 E2')
    (-29, -24)

    Arguments:
    - `text`: a string like "E2 A2 D3 G3 B3 E4"
    '''
    tokens = text.split()
    if not tokens:
        raise PrecondViolation('A tuning needs at least one note')
    return tuple(sorted(set(parse_note(token) for token in tokens)))

def format_tuning(pitches):
    '''
    Formats a sequence of pitches as a space-separated list of names.

    >>> format_tuning([-29, -24, -19, -14, -10, -5])
    'E2 A2 D3 G3 B3 E'
    '''
    return ' '.join(format_note(pitch) for pitch in pitches)
