import logging
from decimal import Decimal

from marketplace.models.product import Product
from marketplace.extensions import db
from marketplace.enums import ProductStatus
from marketplace.utils.exceptions import NotFoundError
from marketplace.utils.helpers import slugify, generate_product_code

logger = logging.getLogger(__name__)


class ProductService:
    """Product service handling product operations"""

    @staticmethod
    def _unique_slug(name: str, exclude_id: str = None) -> str:
        slug = slugify(name) or "product"
        base_slug = slug
        counter = 1
        while Product.query.filter(
            Product.slug == slug, Product.id != exclude_id
        ).first():
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug

    @staticmethod
    def _next_product_code() -> str:
        sequence = Product.query.count() + 1
        code = generate_product_code(sequence)
        while Product.query.filter_by(product_code=code).first():
            sequence += 1
            code = generate_product_code(sequence)
        return code

    @staticmethod
    def create_product(seller_id: str, name: str, description: str, category: str,
                       price: Decimal, stock_quantity: int, **kwargs) -> Product:
        """Create new product"""
        status = ProductStatus(kwargs.get("status") or ProductStatus.ACTIVE.value)

        product = Product(
            seller_id=seller_id,
            product_code=ProductService._next_product_code(),
            name=name,
            slug=ProductService._unique_slug(name),
            description=description,
            category=category,
            price=price,
            stock_quantity=stock_quantity,
            images=kwargs.get("images") or [],
            status=status,
        )

        db.session.add(product)
        db.session.commit()
        logger.info("Seller %s created product %s", seller_id, product.product_code)

        return product

    @staticmethod
    def get_seller_product(product_id: str, seller_id: str) -> Product:
        product = Product.query.filter_by(id=product_id, seller_id=seller_id).first()
        if not product or product.is_deleted:
            raise NotFoundError("Product not found or unauthorized")
        return product

    @staticmethod
    def update_product(product_id: str, seller_id: str, **kwargs) -> Product:
        """Update product"""
        product = ProductService.get_seller_product(product_id, seller_id)

        if "name" in kwargs and kwargs["name"] != product.name:
            kwargs["slug"] = ProductService._unique_slug(kwargs["name"], exclude_id=product.id)

        if "status" in kwargs:
            kwargs["status"] = ProductStatus(kwargs["status"])

        product.update(commit=False, **kwargs)
        if "stock_quantity" in kwargs and "status" not in kwargs:
            product.sync_stock_status()
        db.session.commit()
        return product

    @staticmethod
    def delete_product(product_id: str, seller_id: str):
        """Soft delete product"""
        product = ProductService.get_seller_product(product_id, seller_id)
        product.soft_delete()
        logger.info("Seller %s deleted product %s", seller_id, product.id)
        return product

    @staticmethod
    def admin_delete_product(product_id: str) -> Product:
        product = db.session.get(Product, product_id)
        if not product or product.is_deleted:
            raise NotFoundError("Product not found")
        product.soft_delete()
        logger.info("Admin deleted product %s", product.id)
        return product

    @staticmethod
    def get_products_by_seller(seller_id: str):
        return (
            Product.query.filter_by(seller_id=seller_id, deleted_at=None)
            .order_by(Product.created_at.desc())
            .all()
        )

    @staticmethod
    def get_active_products():
        """Products visible in the public shop"""
        return (
            Product.query.filter(
                Product.deleted_at.is_(None),
                Product.status == ProductStatus.ACTIVE,
                Product.stock_quantity > 0,
            )
            .order_by(Product.created_at.desc())
            .all()
        )

    @staticmethod
    def get_public_product(product_id: str) -> Product:
        product = db.session.get(Product, product_id)
        if not product or not product.is_available:
            raise NotFoundError("Product not found")
        return product
