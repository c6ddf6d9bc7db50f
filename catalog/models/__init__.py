# catalog/models/__init__.py
# Importă toate modelele ca metadata să fie completă înainte de create_all.
from catalog.models.category import Category
from catalog.models.material import Material
from catalog.models.product import Product, ProductMaterial, ProductMedia

__all__ = ["Category", "Material", "Product", "ProductMaterial", "ProductMedia"]
