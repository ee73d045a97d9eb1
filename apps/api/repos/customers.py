from typing import List, Dict, Any
from psycopg import Connection

# Lists customers for the invoice form's customer picker, alphabetically.
def list_customers(conn: Connection) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT id, name
            FROM customers
            ORDER BY name ASC
            """
        )
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]
