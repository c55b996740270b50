"""
Dependency tracking for incremental builds.

A tracker lives for a single compile call. Every file read on behalf of the
document (``src`` references, files a language compiler pulls in) is emitted
through it, and build tooling subscribes to learn which files to watch.
"""
from sfc.models import DependencyEvent


class DependencyTracker:
    """Append-only broadcast of DependencyEvents."""

    def __init__(self, listeners=None):
        self._listeners = []
        self.events = []
        for listener in listeners or ():
            self.subscribe(listener)

    def subscribe(self, listener):
        """
        Register a callable that receives every DependencyEvent emitted from now on.

        Returns:
            A function that removes the listener again.
        """
        if not callable(listener):
            raise TypeError(f"Dependency listener must be callable, got {type(listener).__name__}")
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, path):
        """Record a dependency and deliver it to all current listeners, in order."""
        event = DependencyEvent(path=str(path))
        self.events.append(event)
        for listener in list(self._listeners):
            listener(event)
        return event

    @property
    def paths(self):
        return [event.path for event in self.events]

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
