"""Menu catalog endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.menu import MenuCatalogItem
from app.schemas.menu import MenuCatalogResponse

router = APIRouter()


@router.get("", response_model=List[MenuCatalogResponse])
async def list_menu_catalog(db: AsyncSession = Depends(get_db)):
    """Every menu on offer"""
    result = await db.execute(select(MenuCatalogItem).order_by(MenuCatalogItem.code))
    return result.scalars().all()
