# flake8: noqa
# scripts/create_admin.py

"""
API에는 사용자 등록 엔드포인트가 없으므로, 이 스크립트로 로그인 계정을 만듭니다.

    python -m scripts.create_admin -u admin -e admin@example.com
"""

import asyncio
import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from labtrack.core.config import settings
from labtrack.core.database import Database
from labtrack.core.exceptions import DuplicateKey
from labtrack.domains.usr import crud as usr_crud
from labtrack.domains.usr import schemas as usr_schemas
from labtrack.domains.usr.models import UserRole

cli = typer.Typer()


async def create_user(db: AsyncSession, user_in: usr_schemas.UserCreate) -> bool:
    """
    데이터베이스에 사용자를 생성하는 비동기 함수. 중복이면 False를 반환합니다.
    """
    if user_in.email and await usr_crud.user.get_by_email(db, email=user_in.email):
        typer.echo(f"오류: 이미 존재하는 이메일입니다: {user_in.email}")
        return False

    if await usr_crud.user.get_by_username(db, username=user_in.username):
        typer.echo(f"오류: 이미 존재하는 사용자명입니다: {user_in.username}")
        return False

    try:
        await usr_crud.user.create(db, obj_in=user_in)
    except DuplicateKey as e:
        # 조회와 생성 사이에 다른 프로세스가 같은 계정을 만든 경우
        typer.echo(f"오류: {e.detail}")
        return False
    typer.echo(f"계정이 성공적으로 생성되었습니다: {user_in.username} ({user_in.role.name})")
    return True


async def run_creation(user_in: usr_schemas.UserCreate) -> bool:
    database = Database(settings.DATABASE_URL.get_secret_value())
    database.connect()
    try:
        if settings.AUTO_CREATE_TABLES:
            await database.create_db_and_tables()
        async with database.session() as db:
            return await create_user(db=db, user_in=user_in)
    finally:
        await database.dispose()


@cli.command()
def main(
    username: str = typer.Option(
        ..., '--username', '-u',
        prompt="사용자명(ID)을 입력하세요",
        help="로그인 시 사용할 사용자명(ID)입니다."
    ),
    email: str = typer.Option(
        ..., '--email', '-e',
        prompt="이메일을 입력하세요",
        help="생성할 계정의 이메일 주소입니다."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="생성할 계정의 비밀번호입니다. (최소 8자 이상)"
    ),
    full_name: str = typer.Option(
        "Admin", '--name', '-n',
        help="사용자의 이름입니다."
    ),
    role: str = typer.Option(
        UserRole.ADMIN.name, '--role', '-r',
        help="역할 이름 (ADMIN, LAB_MANAGER, GENERAL_USER)"
    ),
):
    """
    LabTrack 애플리케이션의 로그인 계정을 생성합니다. 기본 역할은 ADMIN 입니다.
    """
    if len(password) < 8:
        typer.echo("오류: 비밀번호는 최소 8자 이상이어야 합니다.")
        raise typer.Abort()

    try:
        user_role = UserRole[role.upper()]
    except KeyError:
        typer.echo(f"오류: 알 수 없는 역할입니다: {role}")
        raise typer.Abort()

    user_data = usr_schemas.UserCreate(
        email=email,
        username=username,
        password=password,
        full_name=full_name,
        role=user_role,
    )

    if not asyncio.run(run_creation(user_data)):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
