from marshmallow import fields, validate, validates, validates_schema, ValidationError, EXCLUDE
from marketplace.extensions import ma
from marketplace.enums import UserRole, ProductStatus, SellerAction

SELLER_PROFILE_FIELDS = (
    "shop_name",
    "registration_number",
    "shop_address",
    "warehouse_address",
    "return_address",
)


class SignupSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=6))
    first_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    last_name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    phone_number = fields.Str(required=True, validate=validate.Length(min=10, max=20))
    address = fields.Str(required=True, validate=validate.Length(min=1))
    user_type = fields.Str(
        required=True, validate=validate.OneOf([UserRole.BUYER.value, UserRole.SELLER.value])
    )

    # Seller-only
    shop_name = fields.Str(validate=validate.Length(min=1, max=255))
    registration_number = fields.Str(validate=validate.Length(min=1, max=100))
    shop_address = fields.Str(validate=validate.Length(min=1))
    warehouse_address = fields.Str(validate=validate.Length(min=1))
    return_address = fields.Str(validate=validate.Length(min=1))
    business_details = fields.Str(allow_none=True)

    @validates_schema
    def validate_seller_profile(self, data, **kwargs):
        if data.get("user_type") != UserRole.SELLER.value:
            return
        missing = {
            name: ["Missing data for required field."]
            for name in SELLER_PROFILE_FIELDS
            if not data.get(name)
        }
        if missing:
            raise ValidationError(missing)


class LoginSchema(ma.Schema):
    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=1))


class VerifyEmailSchema(ma.Schema):
    email = fields.Email(required=True)
    code = fields.Str(required=True, validate=validate.Length(equal=6))


class ResendVerificationSchema(ma.Schema):
    email = fields.Email(required=True)


class ProductCreateSchema(ma.Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    description = fields.Str(required=True, validate=validate.Length(min=1))
    category = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    stock_quantity = fields.Int(required=True, validate=validate.Range(min=0))
    images = fields.List(fields.Str(validate=validate.Length(max=500)))
    status = fields.Str(validate=validate.OneOf([s.value for s in ProductStatus]))


class ProductUpdateSchema(ma.Schema):
    name = fields.Str(validate=validate.Length(min=1, max=255))
    description = fields.Str(validate=validate.Length(min=1))
    category = fields.Str(validate=validate.Length(min=1, max=100))
    price = fields.Decimal(places=2, validate=validate.Range(min=0))
    stock_quantity = fields.Int(validate=validate.Range(min=0))
    images = fields.List(fields.Str(validate=validate.Length(max=500)))
    status = fields.Str(validate=validate.OneOf([s.value for s in ProductStatus]))


class CartAddSchema(ma.Schema):
    product_id = fields.Str(required=True)
    quantity = fields.Int(required=True, validate=validate.Range(min=1))


class CartUpdateSchema(ma.Schema):
    cart_item_id = fields.Str(required=True)
    quantity = fields.Int(required=True, validate=validate.Range(min=1))


class OrderCreateSchema(ma.Schema):
    delivery_address = fields.Str(required=True)

    @validates("delivery_address")
    def validate_delivery_address(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("Delivery address is required")


class ReturnRequestSchema(ma.Schema):
    reason = fields.Str(required=True, validate=validate.Length(min=1, max=2000))


class SellerOrderActionSchema(ma.Schema):
    order_id = fields.Str(required=True)
    action = fields.Str(
        required=True, validate=validate.OneOf([a.value for a in SellerAction])
    )
