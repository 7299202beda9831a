from pydantic import BaseModel, ConfigDict, Field


class AddressOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    title: str
    full_name: str = Field(alias="fullName")
    street: str
    city: str
    province: str
    postal_code: str = Field(alias="postalCode")
    phone: str
    is_default: bool = Field(default=False, alias="isDefault")

    def label(self) -> str:
        return f"{self.city} - {self.province} - {self.postal_code}"

    @classmethod
    def from_model(cls, a) -> "AddressOut":
        return cls(
            id=a.id,
            title=a.title,
            full_name=a.full_name,
            street=a.street,
            city=a.city,
            province=a.province,
            postal_code=a.postal_code,
            phone=a.phone,
            is_default=a.is_default,
        )
