"""
Notifications emitted by the registry.

Every committed state change produces exactly one event. Events are collected while an
operation runs and handed to the EventLog in one batch after the driver commits, so a
failed operation never publishes anything.
"""
from collections import OrderedDict

from nftledger.db.encoder import encode
from nftledger.logger import get_logger

log = get_logger('Events')


class Event:
    name = 'Event'
    fields = ()

    def __init__(self, *args):
        assert len(args) == len(self.fields), '{} takes {} arguments, got {}.'.format(
            self.name, len(self.fields), len(args)
        )
        self.args = OrderedDict(zip(self.fields, args))

    def __getattr__(self, item):
        try:
            return self.__dict__['args'][item]
        except KeyError:
            raise AttributeError(item)

    def to_dict(self):
        return {'event': self.name, 'args': dict(self.args)}

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return self.name == other.name and self.args == other.args

    def __hash__(self):
        return hash((self.name, tuple(self.args.items())))

    def __repr__(self):
        return '{}({})'.format(self.name, ', '.join('{}={!r}'.format(k, v) for k, v in self.args.items()))


class Transfer(Event):
    name = 'Transfer'
    fields = ('sender', 'to', 'token_id')


class Approval(Event):
    name = 'Approval'
    fields = ('owner', 'approved', 'token_id')


class ApprovalForAll(Event):
    name = 'ApprovalForAll'
    fields = ('owner', 'operator', 'approved')


class OwnershipTransferred(Event):
    name = 'OwnershipTransferred'
    fields = ('previous_owner', 'new_owner')


class EventLog:
    def __init__(self):
        self._events = []
        self._subscribers = []

    def subscribe(self, callback):
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback):
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def publish(self, events):
        events = list(events)
        self._events.extend(events)

        for event in events:
            for callback in list(self._subscribers):
                try:
                    callback(event)
                except Exception:
                    # State is already committed. A broken consumer must not stop the others.
                    log.exception('Subscriber {!r} failed on {!r}'.format(callback, event))

    def filter(self, name):
        return [e for e in self._events if e.name == name]

    def clear(self):
        self._events = []

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)

    def __getitem__(self, item):
        return self._events[item]


class FileSink:
    """Subscriber that appends one JSON line per event to a file."""

    def __init__(self, path):
        self.path = path

    def __call__(self, event):
        with open(self.path, 'a') as f:
            f.write(encode(event.to_dict()))
            f.write('\n')
