# storefront/errors.py


class StorefrontError(Exception):
    pass


class UnknownProductError(StorefrontError, LookupError):
    def __init__(self, product_id: int):
        super().__init__(f"product not found: {product_id}")
        self.product_id = product_id
