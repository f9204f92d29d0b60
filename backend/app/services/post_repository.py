from typing import Any, Dict, List, Optional, Tuple
from beanie import PydanticObjectId
from bson import ObjectId
from app.models.post import Post


class PostRepository:
    """Post 컬렉션 접근 (beanie)"""

    async def exists_by_title(self, title: str) -> bool:
        """같은 제목의 공고 존재 여부"""
        return await Post.find_one({"title": title}) is not None

    async def exists_by_title_excluding(self, post_id: str, title: str) -> bool:
        """자기 자신을 제외하고 같은 제목의 공고 존재 여부"""
        query: Dict[str, Any] = {"title": title}
        if ObjectId.is_valid(post_id):
            query["_id"] = {"$ne": PydanticObjectId(post_id)}
        return await Post.find_one(query) is not None

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        """ID로 공고 조회 (형식이 잘못된 ID는 없는 공고로 취급)"""
        if not ObjectId.is_valid(post_id):
            return None
        return await Post.get(PydanticObjectId(post_id))

    async def save(self, post: Post) -> Post:
        """신규 문서는 insert, 기존 문서는 전체 덮어쓰기"""
        if post.id is None:
            await post.insert()
        else:
            await post.save()
        return post

    async def find_page(self, query: Dict[str, Any], page: int, page_size: int) -> Tuple[List[Post], int]:
        """필터 + 페이지 조회 (최신 생성 순)"""
        total = await Post.find(query).count()
        posts = await (
            Post.find(query)
            .sort("-created_at")
            .skip((page - 1) * page_size)
            .limit(page_size)
            .to_list()
        )
        return posts, total

    async def find_by_recruiter_id(self, recruiter_id: str) -> List[Post]:
        return await Post.find({"recruiter_id": recruiter_id}).to_list()
