from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import envelope, require_bearer
from storefront.db import get_db
from storefront.repositories.address_repo import AddressRepository
from storefront.schemas.address_schema import AddressOut

router = APIRouter(tags=["address"])


@router.get("", summary="List saved addresses")
def list_addresses(token: str = Depends(require_bearer), db: Session = Depends(get_db)):
    rows = AddressRepository(db).list_for_owner(token)
    return envelope([AddressOut.from_model(a).model_dump(by_alias=True) for a in rows])
