class ProductError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ProductNotFoundError(ProductError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found with id: {product_id}", status_code=404)


class ProductValidationError(ProductError):
    def __init__(self, message: str):
        super().__init__(message, status_code=422)


class StorageError(ProductError):
    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, status_code=500)
