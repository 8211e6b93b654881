# In backend/referrals/db/base.py

from sqlalchemy.orm import DeclarativeBase

# This is the base class which all the models inherit.
class Base(DeclarativeBase):
    pass
