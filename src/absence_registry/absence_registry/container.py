from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_REPORT_TITLE
from .database.connection import DBConfig, DatabaseConnection
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .records.service import RecordService
from .reports.assets import CachedImage
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserImportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    records_repo: RecordRepository

    auth_service: AuthService
    user_import_service: UserImportService
    record_service: RecordService
    report_service: ReportService


def assemble(
    *,
    users_repo: UserRepository,
    records_repo: RecordRepository,
    conn: Optional[DatabaseConnection] = None,
    report_title: str = DEFAULT_REPORT_TITLE,
    watermark: Optional[CachedImage] = None,
    header_image: Optional[CachedImage] = None,
) -> Container:
    return Container(
        conn=conn,
        users_repo=users_repo,
        records_repo=records_repo,
        auth_service=AuthService(users_repo),
        user_import_service=UserImportService(users_repo),
        record_service=RecordService(records_repo),
        report_service=ReportService(
            records_repo,
            title=report_title,
            watermark=watermark,
            header_image=header_image,
        ),
    )


def build_container(
    *,
    db_config: dict,
    report_title: str = DEFAULT_REPORT_TITLE,
    watermark_path: Optional[str] = None,
    header_image_path: Optional[str] = None,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        users_repo=MySQLUserRepository(conn),
        records_repo=MySQLRecordRepository(conn),
        conn=conn,
        report_title=report_title,
        watermark=CachedImage(watermark_path, label="watermark") if watermark_path else None,
        header_image=CachedImage(header_image_path, label="header") if header_image_path else None,
    )
