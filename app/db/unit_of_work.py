from app.db.database import get_db
from app.realtime.feed import change_feed
from app.repositories.phone_number_repo import PhoneNumberRepository
from app.repositories.history_repo import CallHistoryRepository
from app.repositories.operator_repo import OperatorRepository

class UnitOfWork:

    def __enter__(self):
        self.conn_ctx = get_db()
        self.conn = self.conn_ctx.__enter__()
        self.cursor = self.conn.cursor()

        # Pass SAME connection to repos
        self.numbers = PhoneNumberRepository(self.conn)
        self.history = CallHistoryRepository(self.conn)
        self.operators = OperatorRepository(self.conn)

        self._events = []

        return self

    def publish(self, event):
        """Queue a change event; it is delivered only if this unit commits."""
        self._events.append(event)

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type:
                self.conn.rollback()
            else:
                self.conn.commit()
        finally:
            self.conn_ctx.__exit__(exc_type, exc, tb)

        if not exc_type:
            for event in self._events:
                change_feed.publish(event)
        self._events = []
