class CallHistoryRepository:

    def __init__(self, conn):
        self.conn = conn
        self.cursor = conn.cursor()

    def insert(self, number: dict, operator_id: str, status: str, called_at: str):
        self.cursor.execute("""
            INSERT INTO phone_calls_history
            (phone_number_id, phone_number, name, operator_id, status, called_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (
            number["id"],
            number["phone_number"],
            number.get("name"),
            operator_id,
            status,
            called_at
        ))
        return self.get_by_id(self.cursor.lastrowid)

    def get_by_id(self, entry_id: int):
        self.cursor.execute(
            "SELECT * FROM phone_calls_history WHERE id = ?",
            (entry_id,)
        )
        row = self.cursor.fetchone()
        return dict(row) if row else None

    def list_by_operator(self, operator_id: str):
        self.cursor.execute("""
            SELECT * FROM phone_calls_history
            WHERE operator_id = ?
            ORDER BY called_at DESC, id DESC
        """, (operator_id,))
        return [dict(row) for row in self.cursor.fetchall()]

    def list_all(self):
        self.cursor.execute("""
            SELECT * FROM phone_calls_history
            ORDER BY called_at DESC, id DESC
        """)
        return [dict(row) for row in self.cursor.fetchall()]
