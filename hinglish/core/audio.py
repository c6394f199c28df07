"""Microphone capture for live voice input."""

from __future__ import annotations

import logging

import pyaudio

from hinglish.core.errors import CaptureError

LOG = logging.getLogger("hinglish")


class MicrophoneSource:
    """Blocking 16-bit PCM microphone reader.

    ``open`` and ``read`` block, so async callers run them in a worker thread.
    ``close`` releases the stream and the PyAudio instance at most once.
    """

    def __init__(self, config):
        self.config = config
        self.device_index = config.get("input_device", None)
        self._pa = None
        self._stream = None

    @staticmethod
    def list_input_devices():
        """List available audio input devices."""
        p = pyaudio.PyAudio()
        devices = []
        try:
            for i in range(p.get_device_count()):
                info = p.get_device_info_by_index(i)
                if info["maxInputChannels"] > 0:
                    devices.append(
                        {
                            "index": i,
                            "name": info["name"],
                            "channels": info["maxInputChannels"],
                        }
                    )
        finally:
            p.terminate()
        return devices

    @property
    def is_open(self):
        return self._stream is not None

    def open(self):
        """Acquire the input device. Raises CaptureError if it is unavailable."""
        if self._pa is not None:
            return
        p = pyaudio.PyAudio()
        try:
            stream_kwargs = {
                "format": pyaudio.paInt16,
                "channels": self.config["channels"],
                "rate": self.config["rate"],
                "input": True,
                "frames_per_buffer": self.config["chunk"],
            }
            if self.device_index is not None:
                stream_kwargs["input_device_index"] = self.device_index

            self._stream = p.open(**stream_kwargs)
        except Exception as exc:
            p.terminate()
            raise CaptureError(f"Failed to open audio stream: {exc}") from exc
        self._pa = p
        LOG.debug(f"Microphone opened (device={self.device_index}, rate={self.config['rate']})")

    def read(self):
        """Read one chunk of raw PCM bytes."""
        if self._stream is None:
            raise CaptureError("Microphone is not open")
        return self._stream.read(self.config["chunk"], exception_on_overflow=False)

    def close(self):
        stream, self._stream = self._stream, None
        p, self._pa = self._pa, None
        try:
            if stream is not None:
                stream.stop_stream()
                stream.close()
        except Exception as exc:
            LOG.debug(f"Error while closing audio stream: {exc}")
        finally:
            if p is not None:
                p.terminate()
                LOG.debug("Microphone released")
