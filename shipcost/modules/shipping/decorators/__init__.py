from shipcost.modules.shipping.decorators.logsta import LogstaDecorator

__all__ = ["LogstaDecorator"]
