import logging

from fastapi import HTTPException

logger = logging.getLogger(__name__)


class CRUD:
    allowable_tables = ["users", "quiz_progress", "leaderboard", "user_feedback"]

    def __init__(self, connect_database, table_name, columns=None):
        self.connect_database = connect_database
        self.table_name = table_name
        self.columns = columns

        if self.table_name not in self.allowable_tables:
            raise HTTPException(status_code=404, detail="Invalid Table")

    def create_method(self, data):
        connection = self.connect_database()
        cursor = connection.cursor()

        try:
            data = dict(data)

            columns = ",".join(data.keys())
            placeholders = ",".join(["%s"] * len(data))
            values = tuple(data.values())

            query = f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders}) RETURNING id"
            cursor.execute(query, values)
            fetched_id = cursor.fetchone()

            if not fetched_id:
                raise HTTPException(status_code=500, detail="Something Went Wrong")

            connection.commit()

            return {"message": "Data is Inserted", "id": fetched_id[0]}

        except HTTPException:
            connection.rollback()
            raise

        except Exception as e:
            connection.rollback()
            logger.error(f"Insert into {self.table_name} failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        finally:
            cursor.close()
            connection.close()

    def read_method_each(self, id):
        connection = self.connect_database()
        cursor = connection.cursor()
        selected_columns = ",".join(self.columns) if self.columns else "*"

        try:
            cursor.execute(
                f"SELECT {selected_columns} FROM {self.table_name} WHERE id=%s", (id,)
            )
            fetched_data = cursor.fetchone()

            if not fetched_data:
                raise HTTPException(status_code=404, detail="No Data Found")

            if self.columns:
                return dict(zip(self.columns, fetched_data))

            return fetched_data

        except HTTPException:
            raise

        except Exception as e:
            logger.error(f"Read from {self.table_name} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Database Error: {str(e)}")

        finally:
            cursor.close()
            connection.close()
