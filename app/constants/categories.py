from enum import Enum


class CategoryName(str, Enum):
    SCRIPTS = "SCRIPTS"
    CLOTHES = "CLOTHES"
    YMAP = "YMAP"


REQUIRED_CATEGORIES = [
    (CategoryName.SCRIPTS, "FiveM Scripts and Resources"),
    (CategoryName.CLOTHES, "FiveM Clothing and Accessories"),
    (CategoryName.YMAP, "FiveM Map Files and Locations"),
]
