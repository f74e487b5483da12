import logging
from typing import Any

from dtobox import Data


class OrderData(Data):
    default_messages = {'required': 'Please provide the :attribute.'}

    def rules(self) -> dict[str, Any]:
        return {
            'id': ['required', 'integer'],
            'items': ['required', 'list'],
            'discount': ['sometimes', 'numeric', 'between:0,100'],
            'note': ['nullable', 'string'],
        }

    def labels(self) -> dict[str, str]:
        return {'id': 'order number'}

    def after_validation(self) -> None:
        self.replace(
            lambda attributes: {
                'items': self.set(lambda price: round(price * 1.21, 2)).key('items.*.price'),
                'total': sum(item['price'] for item in attributes['items']),
            }
        )


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)

    order = OrderData().create({'id': 7, 'items': [{'price': 10.0}, {'price': 2.5}], 'note': None})

    print(order.to_dict())
    print('discount given:', order.has('discount'), order.discount)
    print('original items:', order.get_original('items'))
