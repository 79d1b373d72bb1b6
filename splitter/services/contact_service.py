"""Contact Service - reusable people kept outside any bill"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from splitter.core.logging import get_logger
from splitter.models.bill import Person
from splitter.schemas.contact import ContactCreate, ContactUpdate

logger = get_logger(__name__)


class ContactService:
    """Service layer for contact templates"""
    
    @staticmethod
    def new_contact(
        name: str,
        phone_number: str = "",
        payment_method: str = "",
        payment_details: str = "",
    ) -> Person:
        return Person(
            name=name,
            phone_number=phone_number,
            payment_method=payment_method,
            payment_details=payment_details,
            is_contact=True,
        )
    
    @staticmethod
    async def get_contact_by_id(db: AsyncSession, contact_id: UUID) -> Optional[Person]:
        result = await db.execute(
            select(Person).where(Person.id == contact_id, Person.is_contact.is_(True))
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def list_contacts(db: AsyncSession, search: Optional[str] = None) -> List[Person]:
        """Contacts ordered by name, optionally narrowed to a name/phone search"""
        stmt = select(Person).where(Person.is_contact.is_(True)).order_by(Person.name)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(Person.name.ilike(pattern) | Person.phone_number.ilike(pattern))
        result = await db.execute(stmt)
        return list(result.scalars().all())
    
    @staticmethod
    async def create_contact(db: AsyncSession, contact_data: ContactCreate) -> Person:
        contact = ContactService.new_contact(**contact_data.model_dump())
        db.add(contact)
        await db.commit()
        await db.refresh(contact)
        logger.info("Contact created", extra={"contact_id": str(contact.id)})
        return contact
    
    @staticmethod
    async def update_contact(
        db: AsyncSession,
        contact_id: UUID,
        contact_update: ContactUpdate,
    ) -> Optional[Person]:
        contact = await ContactService.get_contact_by_id(db, contact_id)
        if not contact:
            return None
        
        update_data = contact_update.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(contact, field, value)
        
        await db.commit()
        await db.refresh(contact)
        return contact
    
    @staticmethod
    async def delete_contact(db: AsyncSession, contact_id: UUID) -> bool:
        """Delete a contact. People already copied into bills are unaffected."""
        contact = await ContactService.get_contact_by_id(db, contact_id)
        if not contact:
            return False
        await db.delete(contact)
        await db.commit()
        return True
