from .schools import School
from .users import User
from .reviews import Review
