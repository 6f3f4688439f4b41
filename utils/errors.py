class BarcodeSheetError(Exception):
    """Base error; carries the HTTP status the view answers with."""
    status_code = 500
    message = "Barcode generation failed"

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class NoBarcodeDataError(BarcodeSheetError):
    status_code = 400
    message = "No barcode data provided"


class InvalidColorError(BarcodeSheetError):
    status_code = 400
    message = "Invalid color"


class BarcodeEncodeError(BarcodeSheetError):
    message = "Failed to generate barcode"


class BarcodeScaleError(BarcodeSheetError):
    message = "Failed to scale barcode"


class LayoutError(BarcodeSheetError):
    message = "Invalid barcode layout"


class OutputWriteError(BarcodeSheetError):
    message = "Failed to save barcode"
