from fastapi import APIRouter, Depends, Query
from app.dependencies import Resources, get_resources
from app.errors import FieldError, NotFoundError
from app.schemas import CategoryMove, CategoryPayload, CategoryResponse, MoveResponse

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


def _gone() -> NotFoundError:
    return NotFoundError([FieldError("_id", "category not found")])


@router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(data: CategoryPayload, res: Resources = Depends(get_resources)):
    body = await res.category_validator.create(data.model_dump(exclude_unset=True))
    return await res.category_action.create(body)

@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, res: Resources = Depends(get_resources)):
    category = await res.category_validator.get_one(category_id)
    return await res.category_action.get_one(category.id)

@router.get("", response_model=list[CategoryResponse])
async def list_categories(res: Resources = Depends(get_resources)):
    return await res.category_action.get_all()

@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, data: CategoryPayload, res: Resources = Depends(get_resources)):
    body = await res.category_validator.update(category_id, data.model_dump(exclude_unset=True))
    category = await res.category_action.update(category_id, body)
    if category is None:
        raise _gone()
    return category

@router.put("/{category_id}/articles", response_model=MoveResponse)
async def move_articles(category_id: str, data: CategoryMove, res: Resources = Depends(get_resources)):
    """Re-point every article of the category at another category."""
    source, target = await res.category_validator.move_target(
        category_id, data.category_id, param="categoryId"
    )
    return MoveResponse(moved=await res.category_action.move_children(source, target))

@router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(
    category_id: str,
    move_to: str | None = Query(None, alias="moveTo"),
    res: Resources = Depends(get_resources),
):
    """
    Soft-delete the category.  Its articles are soft-deleted too, unless
    ``moveTo`` names a category to move them to.
    """
    if move_to is None:
        await res.category_validator.delete(category_id)
    else:
        await res.category_validator.move_target(category_id, move_to)
    category = await res.category_action.delete(category_id, move_to=move_to)
    if category is None:
        raise _gone()
    return category
