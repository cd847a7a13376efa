##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
SQLite-based generic store implementations for smpstore records.

This module defines the table handling shared by every SQLite store (dynamic
table creation from the model's dataclass fields, filtered queries) and two
generic bases built on it:

- `SQLiteStoreBase` for individually addressed records.
- `SQLitePartitionedStoreBase` for sets of records that are replaced as a whole
  inside a single transaction.

See also:
    - smpstore.backends.store_base: Base classes
    - smpstore.backends.sqlite.sqlite_stores: Concrete store implementations
    - smpstore.db_scripts.data_models: Data model definitions
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, get_type_hints

from smpstore.backends.sqlite.sqlite_connection import SQLiteConnection, transaction
from smpstore.backends.store_base import PartitionedStoreBase, StoreBase, T
from smpstore.backends.utils import deserialize_entity, get_not_found_error_class, serialize_entity


LOG = logging.getLogger(__name__)


def get_sqlite_type(py_type: Any) -> str:
    """
    Map Python types to SQLite types.

    Args:
        py_type: A Python type hint (e.g., str, int, List[str], etc.)

    Returns:
        A string representing the corresponding SQLite column type.
    """
    origin_type = getattr(py_type, "__origin__", py_type)
    result = "TEXT"  # Default fallback

    if origin_type in (list, dict, set):
        result = "TEXT"  # store as JSON string
    elif py_type in (str, datetime, date):
        result = "TEXT"  # dates are stored as ISO format strings
    elif py_type in (int, bool):
        result = "INTEGER"
    elif py_type == float:
        result = "REAL"

    return result


class SQLiteTableMixin(Generic[T]):
    """
    Table handling shared by the SQLite stores.

    Attributes:
        db_path (str): Path of the SQLite database file.
        table_name (str): The table name used for SQLite entries.
        model_class (Type[T]): The model class used for deserialization.
        primary_key (Tuple[str]): The primary key columns.
        indexes (Sequence[Tuple[str]]): Column groups to index.
    """

    def __init__(
        self,
        db_path: str,
        table_name: str,
        model_class: Type[T],
        primary_key: Tuple[str, ...] = ("id",),
        indexes: Sequence[Tuple[str, ...]] = (),
    ):  # pylint: disable=too-many-arguments
        """
        Initialize the store and create its table if it doesn't exist.

        Args:
            db_path: Path of the SQLite database file.
            table_name: The table name used for SQLite entries.
            model_class: The model class used for deserialization.
            primary_key: The primary key columns.
            indexes: Column groups to index.
        """
        self.db_path: str = db_path
        self.table_name: str = table_name
        self.model_class: Type[T] = model_class
        self.primary_key: Tuple[str, ...] = tuple(primary_key)
        self.indexes: Sequence[Tuple[str, ...]] = tuple(tuple(index) for index in indexes)
        self.create_table_if_not_exists()

    def _connect(self) -> SQLiteConnection:
        return SQLiteConnection(self.db_path)

    def _columns(self) -> List[str]:
        return [field_obj.name for field_obj in self.model_class.get_class_fields()]

    def create_table_if_not_exists(self):
        """
        Create the table and its indexes if they don't exist.
        """
        type_hints = get_type_hints(self.model_class)
        field_defs = [f"{name} {get_sqlite_type(type_hints.get(name, str))}" for name in self._columns()]
        field_defs.append(f"PRIMARY KEY ({', '.join(self.primary_key)})")
        field_defs_str = ", ".join(field_defs)

        with self._connect() as conn:
            conn.execute(f"CREATE TABLE IF NOT EXISTS {self.table_name} ({field_defs_str});")
            for index_columns in self.indexes:
                index_name = f"idx_{self.table_name}_{'_'.join(index_columns)}"
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS {index_name} ON {self.table_name} ({', '.join(index_columns)});"
                )

    def clear(self):
        """
        Remove every row of the table.
        """
        with self._connect() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table_name}")
        LOG.info(f"Removed {cursor.rowcount} rows from SQLite table '{self.table_name}'.")

    def _insert_sql(self) -> str:
        columns = self._columns()
        return (
            f"INSERT INTO {self.table_name} ({', '.join(columns)}) "
            f"VALUES ({', '.join(f':{name}' for name in columns)})"
        )

    def _build_where_clause_and_params(self, filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
        """
        Build the SQL WHERE clause and associated parameter list from a filters dictionary.

        Args:
            filters: Dictionary where keys are column names and values are either
                    single values (for equality) or lists (for IN clauses).

        Returns:
            A tuple of (where_clause: str, params: List[Any])

        Raises:
            ValueError: If a filter names a column that does not exist.
        """
        if not filters:
            return "", []

        columns = set(self._columns())
        conditions = []
        params = []

        for column, value in filters.items():
            if column not in columns:
                raise ValueError(f"Cannot filter {self.table_name} on unknown column '{column}'.")
            if isinstance(value, (list, tuple, set)):
                if not value:
                    # Avoid generating invalid SQL like `IN ()`
                    conditions.append("1 = 0")
                else:
                    conditions.append(f"{column} IN ({', '.join('?' for _ in value)})")
                    params.extend(str(getattr(v, "value", v)) for v in value)
            else:
                conditions.append(f"{column} = ?")
                params.append(str(getattr(value, "value", value)))

        where_clause = "WHERE " + " AND ".join(conditions)
        return where_clause, params

    def _retrieve_by_query(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """
        Query the table for rows with optional filters, in insertion order.

        Args:
            filters: Optional dictionary of column filters.

        Returns:
            A list of matching entities.
        """
        log_action = "filtered" if filters else "all"
        LOG.debug(f"Fetching {log_action} rows of {self.table_name}{f' with filters: {filters}' if filters else ''}...")

        where_clause, params = self._build_where_clause_and_params(filters)
        query = f"SELECT * FROM {self.table_name} {where_clause} ORDER BY rowid"
        LOG.debug(f"SQLite query: {query}")
        LOG.debug(f"SQLite params: {params}")

        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()

        entities = [deserialize_entity(dict(row), self.model_class) for row in rows]
        LOG.debug(f"Retrieved {len(entities)} rows of {self.table_name} from SQLite ({log_action}).")
        return entities

    def retrieve_all_filtered(self, filters: Dict[str, Any]) -> List[T]:
        """
        Query the SQLite database for all entities of this type that match the given filters.

        Args:
            filters: A dictionary where keys are column names and values are the values to match.

        Returns:
            A list of filtered entities.
        """
        return self._retrieve_by_query(filters=filters)


class SQLiteStoreBase(SQLiteTableMixin[T], StoreBase[T], Generic[T]):
    """
    Base class for SQLite stores of individually addressed records.

    Methods:
        save: Insert a new record.
        retrieve: Retrieve a record by ID.
        retrieve_all: Query the database for all records of this type.
        retrieve_all_filtered: Query the database for records matching filters.
        update_field: Conditionally change one field of a record.
    """

    def save(self, entity: T):
        """
        Insert a new record into the SQLite database.

        Args:
            entity: The entity to save.
        """
        LOG.debug(f"Creating a {self.table_name} entry in SQLite...")
        with self._connect() as conn:
            conn.execute(self._insert_sql(), serialize_entity(entity))
        LOG.debug(f"Successfully created a {self.table_name} with id '{entity.id}' in SQLite.")

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a record from the SQLite database by ID.

        Args:
            identifier: The ID of the record to retrieve.

        Returns:
            The record if found, None otherwise.
        """
        LOG.debug(f"Retrieving identifier {identifier} in SQLiteStoreBase.")

        with self._connect() as conn:
            row = conn.execute(
                f"SELECT * FROM {self.table_name} WHERE id = :identifier", {"identifier": identifier}
            ).fetchone()

        if row is None:
            return None
        return deserialize_entity(dict(row), self.model_class)

    def retrieve_all(self) -> List[T]:
        """
        Query the SQLite database for all records of this type.

        Returns:
            A list of records.
        """
        return self._retrieve_by_query()

    def update_field(self, identifier: str, field_name: str, new_value: str) -> bool:
        """
        Set `field_name` of a record to `new_value` with a single conditional UPDATE.

        Args:
            identifier: The ID of the record.
            field_name: The field to change.
            new_value: The stored string form of the new value.

        Returns:
            True if the record was modified, False if it already held `new_value`.

        Raises:
            EntityNotFoundError: If no record with `identifier` exists.
            ValueError: If `field_name` may not be updated.
        """
        if field_name not in self.model_class().fields_allowed_to_be_updated:
            raise ValueError(f"Field '{field_name}' of {self.table_name} is not allowed to be updated.")

        params = {"identifier": identifier, "value": new_value}
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE {self.table_name} SET {field_name} = :value "
                f"WHERE id = :identifier AND {field_name} IS NOT :value",
                params,
            )
            if cursor.rowcount > 0:
                LOG.debug(f"Set {field_name} of {self.table_name} '{identifier}' to '{new_value}'.")
                return True

            exists = conn.execute(
                f"SELECT 1 FROM {self.table_name} WHERE id = :identifier", {"identifier": identifier}
            ).fetchone()

        if exists is None:
            error_class = get_not_found_error_class(self.model_class)
            raise error_class(f"{self.table_name.capitalize()} with id '{identifier}' does not exist in the database.")

        LOG.debug(f"{self.table_name.capitalize()} '{identifier}' already has {field_name} '{new_value}'.")
        return False


class SQLitePartitionedStoreBase(SQLiteTableMixin[T], PartitionedStoreBase[T], Generic[T]):
    """
    Base class for SQLite stores whose records are grouped by a partition column.

    Replacing a partition deletes and re-inserts its rows inside one
    `BEGIN IMMEDIATE` transaction, so readers see either the old or the new set.

    Attributes:
        partition_column (str): The column holding the partition key.
    """

    def __init__(
        self,
        db_path: str,
        table_name: str,
        model_class: Type[T],
        partition_column: str,
        indexes: Sequence[Tuple[str, ...]] = (),
    ):  # pylint: disable=too-many-arguments
        """
        Initialize the store; the primary key is `(partition_column, id)`.

        Args:
            db_path: Path of the SQLite database file.
            table_name: The table name used for SQLite entries.
            model_class: The model class used for deserialization.
            partition_column: The column holding the partition key.
            indexes: Column groups to index.
        """
        self.partition_column: str = partition_column
        super().__init__(db_path, table_name, model_class, primary_key=(partition_column, "id"), indexes=indexes)

    def replace_partition(self, partition_key: str, entities: List[T]) -> int:
        """
        Atomically replace every record of a partition.

        Args:
            partition_key: The partition to replace.
            entities: The new records. Their partition column is set to `partition_key`.

        Returns:
            The number of records that were removed.
        """
        rows = []
        for entity in entities:
            serialized_data = serialize_entity(entity)
            serialized_data[self.partition_column] = partition_key
            rows.append(serialized_data)

        LOG.debug(f"Replacing {self.table_name} partition '{partition_key}' with {len(rows)} rows...")
        with self._connect() as conn:
            with transaction(conn):
                cursor = conn.execute(
                    f"DELETE FROM {self.table_name} WHERE {self.partition_column} = :partition",
                    {"partition": partition_key},
                )
                deleted = cursor.rowcount
                if rows:
                    conn.executemany(self._insert_sql(), rows)

        LOG.debug(f"Replaced {deleted} rows of {self.table_name} partition '{partition_key}' with {len(rows)} rows.")
        return deleted

    def retrieve_partition(self, partition_key: str) -> List[T]:
        """
        Retrieve the records of one partition in insertion order.

        Args:
            partition_key: The partition to read.

        Returns:
            The records (empty if the partition holds nothing).
        """
        return self._retrieve_by_query({self.partition_column: partition_key})

    def retrieve_all(self) -> List[T]:
        """
        Retrieve the records of every partition in insertion order.

        Returns:
            A list of records.
        """
        return self._retrieve_by_query()

    def delete_partition(self, partition_key: str) -> int:
        """
        Delete every record of a partition.

        Args:
            partition_key: The partition to delete.

        Returns:
            The number of records removed.
        """
        LOG.debug(f"Deleting {self.table_name} partition '{partition_key}' from SQLite...")
        with self._connect() as conn:
            cursor = conn.execute(
                f"DELETE FROM {self.table_name} WHERE {self.partition_column} = :partition",
                {"partition": partition_key},
            )
        LOG.debug(f"Deleted {cursor.rowcount} rows of {self.table_name} partition '{partition_key}'.")
        return cursor.rowcount

    def count_partitions(self) -> int:
        """
        Count the partitions that hold at least one record.

        Returns:
            The number of distinct partition keys in the table.
        """
        with self._connect() as conn:
            row = conn.execute(f"SELECT COUNT(DISTINCT {self.partition_column}) FROM {self.table_name}").fetchone()
        return row[0]
