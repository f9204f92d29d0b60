"""
JD 파일 저장소

공고 JD 파일은 "posts/{post_id}/{jd_id}" 경로에 저장됩니다.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
import anyio.to_thread
from app.utils.exceptions import BadRequestException, NotFoundException

logger = logging.getLogger(__name__)


def build_jd_path(post_id: str, jd_id: str) -> str:
    return f"posts/{post_id}/{jd_id}"


class BlobStorage(ABC):
    """바이너리 객체 저장소 인터페이스"""

    @abstractmethod
    async def put_object(self, path: str, content: bytes) -> None:
        ...

    @abstractmethod
    async def get_object(self, path: str) -> bytes:
        """없으면 NotFoundException"""
        ...

    @abstractmethod
    async def delete_object(self, path: str) -> bool:
        ...

    @abstractmethod
    async def object_exists(self, path: str) -> bool:
        ...


class LocalBlobStorage(BlobStorage):
    """로컬 파일시스템 저장소"""

    def __init__(self, base_dir: str = "storage"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, relative_path: str) -> Path:
        # 상위 디렉터리 탈출 경로 차단
        full_path = (self.base_dir / relative_path).resolve()
        if not full_path.is_relative_to(self.base_dir.resolve()):
            raise BadRequestException("잘못된 저장 경로입니다.", error_code="VALIDATION_FAILED")
        return full_path

    async def put_object(self, path: str, content: bytes) -> None:
        full_path = self._get_full_path(path)

        def _write():
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(content)

        await anyio.to_thread.run_sync(_write)
        logger.info(f"객체 저장 완료: {path} ({len(content)} bytes)")

    async def get_object(self, path: str) -> bytes:
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            raise NotFoundException("Job description", detail=f"JD 파일을 찾을 수 없습니다: {path}")
        return await anyio.to_thread.run_sync(full_path.read_bytes)

    async def delete_object(self, path: str) -> bool:
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            return False
        await anyio.to_thread.run_sync(full_path.unlink)
        logger.info(f"객체 삭제 완료: {path}")
        return True

    async def object_exists(self, path: str) -> bool:
        return self._get_full_path(path).is_file()
