class OperatorRepository:

    def __init__(self, conn):
        self.conn = conn
        self.cursor = conn.cursor()

    def create(self, operator_id: str, name: str, is_admin: bool, created_at: str):
        self.cursor.execute("""
            INSERT INTO operators (id, name, is_admin, created_at)
            VALUES (?, ?, ?, ?)
        """, (operator_id, name, 1 if is_admin else 0, created_at))
        return self.get_by_id(operator_id)

    def ensure_admin(self, operator_id: str, created_at: str):
        self.cursor.execute("""
            INSERT INTO operators (id, name, is_admin, created_at)
            VALUES (?, ?, 1, ?)
            ON CONFLICT(id) DO UPDATE SET is_admin = 1
        """, (operator_id, operator_id, created_at))
        return self.get_by_id(operator_id)

    def get_by_id(self, operator_id: str):
        self.cursor.execute(
            "SELECT * FROM operators WHERE id = ?",
            (operator_id,)
        )
        row = self.cursor.fetchone()
        if not row:
            return None
        operator = dict(row)
        operator["is_admin"] = bool(operator["is_admin"])
        return operator

    def list_all(self):
        self.cursor.execute("""
            SELECT * FROM operators
            ORDER BY created_at ASC
        """)
        operators = [dict(row) for row in self.cursor.fetchall()]
        for operator in operators:
            operator["is_admin"] = bool(operator["is_admin"])
        return operators
