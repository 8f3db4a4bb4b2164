class PhoneNumberRepository:

    def __init__(self, conn):
        self.conn = conn
        self.cursor = conn.cursor()

    def insert(self, phone_number: str, name, created_at: str):
        self.cursor.execute("""
            INSERT INTO phone_numbers (phone_number, name, created_at)
            VALUES (?, ?, ?)
        """, (phone_number, name, created_at))
        return self.get_by_id(self.cursor.lastrowid)

    def insert_bulk(self, numbers, created_at: str):
        rows = []
        for number in numbers:
            rows.append(self.insert(number.phone_number, number.name, created_at))
        return rows

    def get_by_id(self, number_id: int):
        self.cursor.execute(
            "SELECT * FROM phone_numbers WHERE id = ?",
            (number_id,)
        )
        row = self.cursor.fetchone()
        return dict(row) if row else None

    def list_all(self):
        self.cursor.execute("""
            SELECT * FROM phone_numbers
            ORDER BY created_at ASC, id ASC
        """)
        return [dict(row) for row in self.cursor.fetchall()]

    def delete(self, number_id: int):
        self.cursor.execute("DELETE FROM phone_numbers WHERE id = ?", (number_id,))
        return self.cursor.rowcount

    # ---------- ASSIGNMENT ----------

    def find_claimable(self, operator_id: str):
        self.cursor.execute("""
            SELECT * FROM phone_numbers
            WHERE status IS NULL
            AND (assigned_to IS NULL OR assigned_to = ?)
            ORDER BY CASE WHEN assigned_to = ? THEN 0 ELSE 1 END,
                created_at ASC, id ASC
            LIMIT 1
        """, (operator_id, operator_id))
        row = self.cursor.fetchone()
        return dict(row) if row else None

    def try_claim(self, number_id: int, operator_id: str, assigned_at: str) -> bool:
        """Compare-and-set on assigned_to; False when another operator got there first."""
        self.cursor.execute("""
            UPDATE phone_numbers
            SET assigned_to = ?,
                assigned_at = ?
            WHERE id = ?
            AND status IS NULL
            AND (assigned_to IS NULL OR assigned_to = ?)
        """, (operator_id, assigned_at, number_id, operator_id))
        return self.cursor.rowcount == 1

    def finalize(self, number_id: int, operator_id: str, status: str, called_at: str) -> bool:
        self.cursor.execute("""
            UPDATE phone_numbers
            SET status = ?,
                called_at = ?,
                assigned_to = NULL,
                assigned_at = NULL
            WHERE id = ?
            AND status IS NULL
            AND (assigned_to IS NULL OR assigned_to = ?)
        """, (status, called_at, number_id, operator_id))
        return self.cursor.rowcount == 1

    def release(self, number_id: int):
        self.cursor.execute("""
            UPDATE phone_numbers
            SET assigned_to = NULL,
                assigned_at = NULL
            WHERE id = ?
            AND status IS NULL
        """, (number_id,))
        return self.cursor.rowcount

    def list_stale_claims(self, cutoff: str):
        self.cursor.execute("""
            SELECT * FROM phone_numbers
            WHERE status IS NULL
            AND assigned_to IS NOT NULL
            AND assigned_at < ?
            ORDER BY id ASC
        """, (cutoff,))
        return [dict(row) for row in self.cursor.fetchall()]

    def release_if_stale(self, number_id: int, cutoff: str) -> bool:
        self.cursor.execute("""
            UPDATE phone_numbers
            SET assigned_to = NULL,
                assigned_at = NULL
            WHERE id = ?
            AND status IS NULL
            AND assigned_to IS NOT NULL
            AND assigned_at < ?
        """, (number_id, cutoff))
        return self.cursor.rowcount == 1

    def count_by_state(self):
        self.cursor.execute("""
            SELECT
                COUNT(*) AS total,
                SUM(CASE WHEN status IS NULL AND assigned_to IS NULL THEN 1 ELSE 0 END) AS available,
                SUM(CASE WHEN status IS NULL AND assigned_to IS NOT NULL THEN 1 ELSE 0 END) AS claimed,
                SUM(CASE WHEN status IS NOT NULL THEN 1 ELSE 0 END) AS worked
            FROM phone_numbers
        """)
        row = dict(self.cursor.fetchone())
        return {key: (value or 0) for key, value in row.items()}
