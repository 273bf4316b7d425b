import json
import os
import tempfile
from unittest import TestCase
from nftledger.events import Event, EventLog, FileSink, Transfer, Approval, ApprovalForAll, OwnershipTransferred


class TestEvent(TestCase):
    def test_fields_are_attributes(self):
        e = Transfer('alice', 'bob', 1)

        self.assertEqual(e.sender, 'alice')
        self.assertEqual(e.to, 'bob')
        self.assertEqual(e.token_id, 1)

    def test_unknown_attribute_raises(self):
        e = Transfer('alice', 'bob', 1)
        with self.assertRaises(AttributeError):
            e.nothing

    def test_wrong_arity(self):
        with self.assertRaises(AssertionError):
            Approval('alice', 'bob')

    def test_equality(self):
        self.assertEqual(Transfer('alice', 'bob', 1), Transfer('alice', 'bob', 1))
        self.assertNotEqual(Transfer('alice', 'bob', 1), Transfer('alice', 'bob', 2))
        self.assertNotEqual(Transfer('a', 'b', 1), Approval('a', 'b', 1))

    def test_to_dict(self):
        e = ApprovalForAll('alice', 'bob', True)
        self.assertEqual(e.to_dict(), {
            'event': 'ApprovalForAll',
            'args': {'owner': 'alice', 'operator': 'bob', 'approved': True}
        })

    def test_repr(self):
        self.assertEqual(repr(OwnershipTransferred('a', 'b')), "OwnershipTransferred(previous_owner='a', new_owner='b')")

    def test_base_event_takes_no_args(self):
        self.assertEqual(Event().to_dict(), {'event': 'Event', 'args': {}})


class TestEventLog(TestCase):
    def setUp(self):
        self.log = EventLog()

    def test_publish_keeps_order(self):
        events = [Transfer('0x0', 'a', 1), Approval('a', 'b', 1), Transfer('a', 'c', 1)]
        self.log.publish(events)

        self.assertEqual(list(self.log), events)
        self.assertEqual(len(self.log), 3)
        self.assertEqual(self.log[1], events[1])

    def test_subscribers_receive_every_event_in_order(self):
        received = []
        self.log.subscribe(received.append)

        self.log.publish([Transfer('0x0', 'a', 1), Transfer('0x0', 'a', 2)])

        self.assertEqual(received, [Transfer('0x0', 'a', 1), Transfer('0x0', 'a', 2)])

    def test_subscribe_twice_delivers_once(self):
        received = []
        self.log.subscribe(received.append)
        self.log.subscribe(received.append)

        self.log.publish([Transfer('0x0', 'a', 1)])

        self.assertEqual(len(received), 1)

    def test_unsubscribe(self):
        received = []
        self.log.subscribe(received.append)
        self.log.unsubscribe(received.append)
        self.log.unsubscribe(received.append)

        self.log.publish([Transfer('0x0', 'a', 1)])

        self.assertEqual(received, [])

    def test_failing_subscriber_does_not_stop_others(self):
        def broken(event):
            raise RuntimeError('boom')

        received = []
        self.log.subscribe(broken)
        self.log.subscribe(received.append)

        self.log.publish([Transfer('0x0', 'a', 1)])

        self.assertEqual(received, [Transfer('0x0', 'a', 1)])
        self.assertEqual(len(self.log), 1)

    def test_filter(self):
        self.log.publish([Transfer('0x0', 'a', 1), Approval('a', 'b', 1)])
        self.assertEqual(self.log.filter('Approval'), [Approval('a', 'b', 1)])

    def test_clear(self):
        self.log.publish([Transfer('0x0', 'a', 1)])
        self.log.clear()
        self.assertEqual(len(self.log), 0)


class TestFileSink(TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix='.jsonl')
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def test_writes_one_line_per_event(self):
        log = EventLog()
        log.subscribe(FileSink(self.path))

        log.publish([Transfer('0x0', 'alice', 2 ** 255), ApprovalForAll('alice', 'bob', True)])

        with open(self.path) as f:
            lines = [json.loads(l) for l in f.read().splitlines()]

        self.assertEqual(lines[0], {
            'event': 'Transfer',
            'args': {'sender': '0x0', 'to': 'alice', 'token_id': {'__big_int__': str(2 ** 255)}}
        })
        self.assertEqual(lines[1]['event'], 'ApprovalForAll')
        self.assertEqual(len(lines), 2)
