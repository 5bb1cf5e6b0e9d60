import json
import uuid

import mysql.connector
from flask import g, current_app

from ..models.schema import get_schema

BUSINESS_COLUMNS = ('name', 'field', 'description', 'color_palette')


class DuplicateRecord(Exception):
    """A unique column (such as a user email) already holds the value."""


def get_store():
    return current_app.extensions['store']


class MySQLStore:
    """Typed CRUD over the MySQL tables, one connection per app context."""

    def __init__(self, db_config):
        self.db_config = db_config

    def connection(self):
        if 'db' not in g:
            g.db = mysql.connector.connect(**self.db_config)
        return g.db

    def close(self, exception=None):
        db = g.pop('db', None)
        if db is not None:
            db.close()

    def init_schema(self):
        db = self.connection()
        cursor = db.cursor()
        for table_name, schema in get_schema().items():
            cursor.execute(schema)
        db.commit()
        cursor.close()

    def _fetchone(self, query, params=()):
        cursor = self.connection().cursor(dictionary=True)
        try:
            cursor.execute(query, params)
            return cursor.fetchone()
        finally:
            cursor.close()

    def _fetchall(self, query, params=()):
        cursor = self.connection().cursor(dictionary=True)
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def _execute(self, query, params=()):
        db = self.connection()
        cursor = db.cursor()
        try:
            cursor.execute(query, params)
            db.commit()
            return cursor.rowcount
        except mysql.connector.Error:
            db.rollback()
            raise
        finally:
            cursor.close()

    # Users

    def create_user(self, name, email, password_hash):
        user_id = str(uuid.uuid4())
        try:
            self._execute("""
                INSERT INTO users (id, name, email, password_hash)
                VALUES (%s, %s, %s, %s)
            """, (user_id, name, email, password_hash))
        except mysql.connector.IntegrityError as e:
            raise DuplicateRecord(f"User {email} already exists") from e
        return self.get_user_by_id(user_id)

    def get_user_by_id(self, user_id):
        return self._fetchone("SELECT * FROM users WHERE id = %s", (user_id,))

    def get_user_by_email(self, email):
        return self._fetchone("SELECT * FROM users WHERE email = %s", (email,))

    # Businesses

    @staticmethod
    def _business_row(row):
        if row and row.get('color_palette') is not None:
            row['color_palette'] = json.loads(row['color_palette'])
        return row

    def list_businesses(self, owner_id):
        rows = self._fetchall(
            "SELECT * FROM businesses WHERE owner_id = %s ORDER BY created_at DESC",
            (owner_id,)
        )
        return [self._business_row(row) for row in rows]

    def create_business(self, owner_id, name, field, description=None, color_palette=None):
        business_id = str(uuid.uuid4())
        palette = json.dumps(color_palette) if color_palette is not None else None
        self._execute("""
            INSERT INTO businesses (id, name, field, description, color_palette, owner_id)
            VALUES (%s, %s, %s, %s, %s, %s)
        """, (business_id, name, field, description, palette, owner_id))
        return self.get_business(business_id)

    def get_business(self, business_id):
        return self._business_row(
            self._fetchone("SELECT * FROM businesses WHERE id = %s", (business_id,))
        )

    def update_business(self, business_id, changes):
        columns = [column for column in BUSINESS_COLUMNS if column in changes]
        if columns:
            values = []
            for column in columns:
                value = changes[column]
                if column == 'color_palette' and value is not None:
                    value = json.dumps(value)
                values.append(value)
            assignments = ', '.join(f"{column} = %s" for column in columns)
            self._execute(
                f"UPDATE businesses SET {assignments} WHERE id = %s",
                (*values, business_id)
            )
        return self.get_business(business_id)

    def delete_business(self, business_id):
        return self._execute("DELETE FROM businesses WHERE id = %s", (business_id,))

    # Media files

    def list_media_files(self, owner_id, business_id=None, media_type=None):
        query = "SELECT * FROM media_files WHERE owner_id = %s"
        params = [owner_id]
        if business_id is not None:
            query += " AND business_id = %s"
            params.append(business_id)
        if media_type is not None:
            query += " AND type = %s"
            params.append(media_type)
        query += " ORDER BY created_at DESC"
        return self._fetchall(query, tuple(params))

    def create_media_file(self, owner_id, url, media_type, business_id=None):
        media_id = str(uuid.uuid4())
        self._execute("""
            INSERT INTO media_files (id, url, type, owner_id, business_id)
            VALUES (%s, %s, %s, %s, %s)
        """, (media_id, url, media_type, owner_id, business_id))
        return self.get_media_file(media_id)

    def get_media_file(self, media_id):
        return self._fetchone("SELECT * FROM media_files WHERE id = %s", (media_id,))

    def delete_media_file(self, media_id):
        return self._execute("DELETE FROM media_files WHERE id = %s", (media_id,))

    # Marketing plans

    def list_marketing_plans(self, owner_id, business_id=None):
        if business_id is None:
            return self._fetchall(
                "SELECT * FROM marketing_plans WHERE owner_id = %s ORDER BY created_at DESC",
                (owner_id,)
            )
        return self._fetchall("""
            SELECT * FROM marketing_plans
            WHERE owner_id = %s AND business_id = %s
            ORDER BY created_at DESC
        """, (owner_id, business_id))

    def create_marketing_plan(self, owner_id, business_id, content):
        plan_id = str(uuid.uuid4())
        self._execute("""
            INSERT INTO marketing_plans (id, content, owner_id, business_id)
            VALUES (%s, %s, %s, %s)
        """, (plan_id, content, owner_id, business_id))
        return self.get_marketing_plan(plan_id)

    def get_marketing_plan(self, plan_id):
        return self._fetchone("SELECT * FROM marketing_plans WHERE id = %s", (plan_id,))

    def update_marketing_plan(self, plan_id, content):
        self._execute("UPDATE marketing_plans SET content = %s WHERE id = %s", (content, plan_id))
        return self.get_marketing_plan(plan_id)

    def delete_marketing_plan(self, plan_id):
        return self._execute("DELETE FROM marketing_plans WHERE id = %s", (plan_id,))

    # Conversations

    def list_conversations(self, owner_id, business_id):
        return self._fetchall("""
            SELECT * FROM conversations
            WHERE owner_id = %s AND business_id = %s
            ORDER BY created_at DESC
        """, (owner_id, business_id))

    def create_conversation(self, owner_id, business_id, prompt_content, response_content):
        conversation_id = str(uuid.uuid4())
        self._execute("""
            INSERT INTO conversations (id, prompt_content, response_content, owner_id, business_id)
            VALUES (%s, %s, %s, %s, %s)
        """, (conversation_id, prompt_content, response_content, owner_id, business_id))
        return self._fetchone("SELECT * FROM conversations WHERE id = %s", (conversation_id,))
