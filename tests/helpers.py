"""
Test helpers: a Flask app on in-memory SQLite and a manual clock
standing in for threading.Timer.
"""

from qr_mapper.app import create_app
from qr_mapper.extensions import db


def create_test_app(create_tables=True, **overrides):
    config = {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'LOG_LEVEL': 'WARNING',
    }
    config.update(overrides)
    app = create_app(config)
    if create_tables and config.get('SQLALCHEMY_DATABASE_URI'):
        with app.app_context():
            db.create_all()
    return app


class ManualTimer:
    def __init__(self, clock, delay, callback):
        self.clock = clock
        self.due = clock.now + delay
        self.callback = callback
        self.daemon = False
        self.cancelled = False

    def start(self):
        self.clock.timers.append(self)

    def cancel(self):
        self.cancelled = True


class ManualClock:
    def __init__(self):
        self.now = 0.0
        self.timers = []

    def timer(self, delay, callback):
        return ManualTimer(self, delay, callback)

    def pending(self):
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds):
        self.now += seconds
        while True:
            due = [t for t in self.pending() if t.due <= self.now]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            timer.callback()
        self.timers = self.pending()
