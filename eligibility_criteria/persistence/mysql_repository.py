# ==============================================
# MySQLPlanRepository
# ==============================================
#
# PURPOSE:
#   Load benefit plan snapshots from, and write json_ext back to, the
#   benefit plan table.
#
# WHY THIS CLASS EXISTS:
#   The criteria store only returns new snapshots; someone has to push
#   them to the database. Only the json_ext column is ever written, so
#   the other columns of the record stay under the control of the
#   application that owns them.
#
# CLASS: MySQLPlanRepository
# --------------------------
#   Stateful - holds connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database,
#              table="social_protection_benefitplan",
#              id_column="UUID", extension_column="Json_ext")
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() / disconnect()
#   - get(plan_id) -> BenefitPlan            (PlanNotFoundError if absent)
#   - list_ids(limit=None) -> list[str]
#   - update_extension(plan) -> int          (rows affected)
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLPlanRepository(...) as repo:` usage.
#
# ==============================================

from typing import List, Optional

import pymysql
import pymysql.cursors

from eligibility_criteria.config import MySQLConfig
from eligibility_criteria.errors import PlanNotFoundError, RepositoryError
from eligibility_criteria.filters.identifiers import resolve_plan_id
from eligibility_criteria.logging_config import get_logger
from eligibility_criteria.storage.models import BenefitPlan


logger = get_logger(__name__)


class MySQLPlanRepository:
    def __init__(
        self,
        host,
        port,
        user,
        password,
        database,
        table: str = "social_protection_benefitplan",
        id_column: str = "UUID",
        extension_column: str = "Json_ext"
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.table = table
        self.id_column = id_column
        self.extension_column = extension_column
        self.connection = None

    @classmethod
    def from_config(cls, config: MySQLConfig) -> "MySQLPlanRepository":
        return cls(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            table=config.plan_table,
            id_column=config.id_column,
            extension_column=config.extension_column
        )

    def connect(self) -> None:
        try:
            self.connection = pymysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset="utf8mb4",
                cursorclass=pymysql.cursors.DictCursor
            )
        except pymysql.MySQLError as e:
            raise RepositoryError(
                f"Could not connect to MySQL at {self.host}:{self.port}",
                {"error": str(e)}
            ) from e
        logger.info("mysql_connected", host=self.host, database=self.database)

    def disconnect(self) -> None:
        # Close connection cleanly
        if self.connection:
            self.connection.close()
            self.connection = None

    def get(self, plan_id: str) -> BenefitPlan:
        """
        Load one plan. Transport-encoded ids are decoded first.

        Raises:
            PlanNotFoundError: If no row has this id
            RepositoryError: On database errors
        """
        lookup_id = resolve_plan_id(plan_id)
        query = f"SELECT * FROM `{self.table}` WHERE `{self.id_column}` = %s"
        row = self._fetch_one(query, (lookup_id,))
        if row is None:
            raise PlanNotFoundError(lookup_id)

        extension = row.pop(self.extension_column, None)
        row.pop(self.id_column, None)
        return BenefitPlan(id=lookup_id, extension=extension, attributes=row)

    def list_ids(self, limit: Optional[int] = None) -> List[str]:
        query = f"SELECT `{self.id_column}` FROM `{self.table}`"
        params = None
        if limit is not None:
            query += " LIMIT %s"
            params = (limit,)
        cursor = self._cursor()
        try:
            cursor.execute(query, params)
            rows = cursor.fetchall()
        except pymysql.MySQLError as e:
            raise RepositoryError("Could not list benefit plans", {"error": str(e)}) from e
        finally:
            cursor.close()
        return [str(row[self.id_column]) for row in rows]

    def update_extension(self, plan: BenefitPlan) -> int:
        """
        Write the plan's json_ext column.

        Args:
            plan: Snapshot returned by CriteriaStore.save()

        Returns:
            Number of rows affected (0 if the value was already stored)
        """
        query = (
            f"UPDATE `{self.table}` SET `{self.extension_column}` = %s "
            f"WHERE `{self.id_column}` = %s"
        )
        cursor = self._cursor()
        try:
            affected = cursor.execute(query, (plan.extension, resolve_plan_id(plan.id)))
            self.connection.commit()
        except pymysql.MySQLError as e:
            self.connection.rollback()
            raise RepositoryError(
                f"Could not update json_ext of plan {plan.id!r}",
                {"plan_id": plan.id, "error": str(e)}
            ) from e
        finally:
            cursor.close()

        logger.info("plan_extension_updated", plan_id=plan.id, rows=affected)
        return affected

    def _cursor(self):
        if self.connection is None:
            raise RepositoryError("Not connected to MySQL.")
        return self.connection.cursor()

    def _fetch_one(self, query: str, params: tuple) -> Optional[dict]:
        cursor = self._cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchone()
        except pymysql.MySQLError as e:
            raise RepositoryError("Query failed", {"query": query, "error": str(e)}) from e
        finally:
            cursor.close()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False
