# -*- coding: utf-8 -*-

'''
audio.py

Sound card input and output through PyAudio, plus sample sources and
tone synthesis that don't need a sound card.
'''

import logging

import numpy
import pyaudio
import scipy.io.wavfile

from .errors import PrecondViolation

logger = logging.getLogger(__name__)

# audio data is read in in chunks (buffering)
CHUNK    = 1024
# record 16-bit signed mono
FORMAT   = pyaudio.paInt16
CHANNELS = 1

# loud enough to hear, quiet enough not to clip
TONE_AMPLITUDE = 8192


class MicrophoneSource(object):
    '''
    Reads windows of 16-bit mono samples from a sound card.
    '''

    def __init__(self, sample_rate, device=None, chunk=CHUNK):
        '''
        Opens the input stream.

        Arguments:
        - `sample_rate`: samples per second
        - `device`: PyAudio input device index; None for the default
        - `chunk`: frames per buffer
        '''
        self.sample_rate = sample_rate
        self.audio = pyaudio.PyAudio()
        try:
            self.stream = self.audio.open(format = FORMAT,
                                          channels = CHANNELS,
                                          rate = sample_rate,
                                          input = True,
                                          input_device_index = device,
                                          frames_per_buffer = chunk)
        except (IOError, OSError):
            self.audio.terminate()
            raise
        logger.info('Recording from %s at %d Hz',
                    'default device' if device is None else 'device {}'.format(device),
                    sample_rate)

    def read_window(self, length):
        '''
        Reads exactly `length` samples, as a new int16 vector.
        '''
        # overflows just mean we were slow; the data is still usable
        data = self.stream.read(length, exception_on_overflow=False)
        samples = numpy.frombuffer(data, dtype=numpy.int16).copy()
        if len(samples) != length:
            raise PrecondViolation(
                'Short read from sound card: wanted {} samples, got {}'.format(
                    length, len(samples)))
        return samples

    def close(self):
        self.stream.stop_stream()
        self.stream.close()
        self.audio.terminate()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False


class ArraySource(object):
    '''
    Serves consecutive windows out of a recording held in memory.
    Raises EOFError once fewer than a full window of samples remain.
    '''

    def __init__(self, samples, hop=None):
        '''
        Arguments:
        - `samples`: a vector of 16-bit samples
        - `hop`: the distance between the starts of consecutive windows;
          None means windows follow on from each other
        '''
        self.samples = numpy.asarray(samples, dtype=numpy.int16)
        self.hop = hop
        self.position = 0

    def read_window(self, length):
        if self.position + length > len(self.samples):
            raise EOFError('End of recording')
        window = self.samples[self.position:self.position + length].copy()
        self.position += self.hop if self.hop is not None else length
        return window


def sine_wave(freq, sample_rate, length, amplitude=TONE_AMPLITUDE):
    '''
    Synthesises a sine wave as a vector of 16-bit samples.

    >>> sine_wave(441., 44100, 4, amplitude=1000)
    array([  0,  62, 125, 187], dtype=int16)

    Arguments:
    - `freq`: frequency in Hz
    - `sample_rate`: samples per second
    - `length`: number of samples
    - `amplitude`: peak amplitude
    '''
    coords = numpy.arange(length)
    wave = amplitude * numpy.sin(coords * freq * 2 * numpy.pi / sample_rate)
    return wave.astype(numpy.int16)

def play_samples(samples, sample_rate, device=None, chunk=CHUNK):
    '''
    Plays a vector of 16-bit samples on a sound card, returning once
    they have all been played.
    '''
    samples = numpy.asarray(samples, dtype=numpy.int16)
    audio = pyaudio.PyAudio()
    try:
        stream = audio.open(format = FORMAT,
                            channels = CHANNELS,
                            rate = sample_rate,
                            output = True,
                            output_device_index = device,
                            frames_per_buffer = chunk)
        try:
            for start in range(0, len(samples), chunk):
                stream.write(samples[start:start + chunk].tobytes())
            stream.stop_stream()
        finally:
            stream.close()
    finally:
        audio.terminate()

def list_devices():
    '''
    Yields (index, name, input channels, output channels) for each
    audio device PyAudio knows about.
    '''
    audio = pyaudio.PyAudio()
    try:
        for index in range(audio.get_device_count()):
            info = audio.get_device_info_by_index(index)
            yield (index, info['name'], info['maxInputChannels'],
                   info['maxOutputChannels'])
    finally:
        audio.terminate()

def read_wav(path):
    '''
    Reads a WAV file as mono 16-bit samples.  Returns (sample_rate,
    samples); stereo files are mixed down.

    Arguments:
    - `path`: the WAV file to read
    '''
    sample_rate, data = scipy.io.wavfile.read(path)
    if data.ndim == 2:
        # mix down to mono, keeping the sample type
        data = data.mean(axis=1).astype(data.dtype)
    if data.dtype.kind == 'f':
        # floating point WAVs are scaled to [-1, 1]
        data = data * numpy.iinfo(numpy.int16).max
    elif data.dtype == numpy.uint8:
        data = (data.astype(numpy.int32) - 128) * 256
    elif data.dtype == numpy.int32:
        data = data // 65536
    elif data.dtype != numpy.int16:
        raise PrecondViolation('Unsupported WAV sample type {}'.format(data.dtype))
    info = numpy.iinfo(numpy.int16)
    samples = numpy.clip(numpy.round(data), info.min, info.max).astype(numpy.int16)
    logger.debug('Read %d samples at %d Hz from %s', len(samples), sample_rate, path)
    return sample_rate, samples
