from app.models.profile import Profile
from app.models.category import Category
from app.models.item import Item
from app.models.payment import Payment
from app.models.favorite import Favorite
from app.models.rating import Rating
from app.models.download import Download
from app.models.ad import Ad

# add ALL models here
