from fastapi import APIRouter, Depends
from app.dependencies import Resources, get_resources
from app.errors import FieldError, NotFoundError
from app.schemas import ArticlePayload, ArticleResponse

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])


def _gone() -> NotFoundError:
    # Row vanished between validation and the write.
    return NotFoundError([FieldError("_id", "article not found")])


@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(data: ArticlePayload, res: Resources = Depends(get_resources)):
    body = await res.article_validator.create(data.model_dump(exclude_unset=True))
    return await res.article_action.create(body)

@router.get("/category/{category_id}", response_model=list[ArticleResponse])
async def list_articles_by_category(category_id: str, res: Resources = Depends(get_resources)):
    category = await res.category_validator.get_one(category_id)
    return await res.article_action.get_by_category(category.id)

@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, res: Resources = Depends(get_resources)):
    article = await res.article_validator.get_one(article_id)
    return await res.article_action.get_one(article.id)

@router.get("", response_model=list[ArticleResponse])
async def list_articles(res: Resources = Depends(get_resources)):
    return await res.article_action.get_all()

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: str, data: ArticlePayload, res: Resources = Depends(get_resources)):
    body = await res.article_validator.update(article_id, data.model_dump(exclude_unset=True))
    article = await res.article_action.update(article_id, body)
    if article is None:
        raise _gone()
    return article

@router.delete("/{article_id}", response_model=ArticleResponse)
async def delete_article(article_id: str, res: Resources = Depends(get_resources)):
    await res.article_validator.delete(article_id)
    article = await res.article_action.delete(article_id)
    if article is None:
        raise _gone()
    return article
