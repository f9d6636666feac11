"""
telemetry.py

Class and functions for reading data from the server without paying a round
trip on every read.
"""
import logging

import krpc.error

logger = logging.getLogger(__name__)


class TelemetryConnectionError(ConnectionError):
    pass


class StreamClosedError(RuntimeError):
    pass


class TelemetryStream(object):
    """
    A continuously updated local copy of a value computed on the server.

    kRPC starts a stream synchronously, so by the time open() returns the first
    value has arrived and get() never waits on the network.
    """
    def __init__(self, stream, name=None):
        self._stream = stream
        self.name = name
        self.closed = False

    @classmethod
    def open(cls, connection, accessor, *args, **kwargs):
        """
        Subscribe to accessor(*args) on the given connection

        :param connection: krpc connection to subscribe on
        :param accessor: the remote function or getattr to stream
        :param name: optional label used in log and error messages

        :return: the open TelemetryStream
        """
        name = kwargs.pop('name', None)
        try:
            stream = connection.add_stream(accessor, *args)
        except (krpc.error.RPCError, OSError) as exc:
            raise TelemetryConnectionError('could not open stream {0}: {1}'.format(name or accessor, exc))

        logger.debug("opened stream %s", name or accessor)
        return cls(stream, name=name)

    def get(self):
        if self.closed:
            raise StreamClosedError('stream {0} is closed'.format(self.name))
        return self._stream()

    def __call__(self):
        return self.get()

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            self._stream.remove()
        except (krpc.error.RPCError, OSError) as exc:
            # the server may already be gone during teardown
            logger.warning("could not remove stream %s: %s", self.name, exc)
            return
        logger.debug("closed stream %s", self.name)


class StreamManager(object):
    """
    Keeps track of every stream a program opens so they can all be released
    together when it finishes or gets cancelled
    """
    def __init__(self, conn):
        self._conn = conn
        self._streams = {}

    def add(self, key, accessor, *args):
        """
        Open a stream under the given key, or return the one already open there

        :param key: name to store the stream under
        :param accessor: the remote function to stream
        :return: the TelemetryStream
        """
        if key in self._streams:
            return self._streams[key]

        stream = TelemetryStream.open(self._conn, accessor, *args, name=key)
        self._streams[key] = stream
        return stream

    def addAttribute(self, key, obj, attribute):
        return self.add(key, getattr, obj, attribute)

    def remove(self, key):
        stream = self._streams.pop(key, None)
        if stream:
            stream.close()

    def closeAll(self):
        for key in list(self._streams):
            self.remove(key)
