import logging
from app.db.database import get_db
from app.config import settings

logger = logging.getLogger(__name__)

def init_db():
    """Initialize database with required tables"""
    with get_db() as conn:
        cursor = conn.cursor()

        # Phone number pool
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS phone_numbers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                phone_number TEXT NOT NULL,
                name TEXT,
                status TEXT CHECK (status IN ('answered', 'no_answer', 'rejected')),
                assigned_to TEXT,
                assigned_at TEXT,
                called_at TEXT,
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_phone_numbers_claimable
            ON phone_numbers (status, assigned_to, created_at)
        ''')

        # Call history (append-only, keeps a snapshot of the number)
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS phone_calls_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                phone_number_id INTEGER NOT NULL,
                phone_number TEXT NOT NULL,
                name TEXT,
                operator_id TEXT NOT NULL,
                status TEXT NOT NULL CHECK (status IN ('answered', 'no_answer', 'rejected')),
                called_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE INDEX IF NOT EXISTS idx_history_operator
            ON phone_calls_history (operator_id, called_at)
        ''')

        # Operator profiles
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS operators (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                is_admin INTEGER DEFAULT 0,
                created_at TEXT NOT NULL
            )
        ''')

        conn.commit()
        logger.info("Database initialized at %s", settings.DB_PATH)
