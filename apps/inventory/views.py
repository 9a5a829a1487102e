from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.inventory import services
from apps.inventory.serializers import (
    NameSearchQuerySerializer,
    PriceRangeQuerySerializer,
    ProductSerializer,
    ProductUpdateSerializer,
    StockQuantityQuerySerializer,
)


class ProductViewSet(viewsets.ViewSet):
    lookup_value_regex = r"\d+"

    def list(self, request):
        return Response(ProductSerializer(services.list_products(), many=True).data)

    def create(self, request):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = services.create_product(data=serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ProductSerializer(services.get_product(pk)).data)

    def update(self, request, pk=None):
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = services.update_product(pk, data=serializer.validated_data)
        return Response(ProductSerializer(product).data)

    def destroy(self, request, pk=None):
        services.delete_product(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path=r"sku/(?P<sku>[^/]+)")
    def by_sku(self, request, sku=None):
        return Response(ProductSerializer(services.get_product_by_sku(sku)).data)

    @action(detail=True, methods=["post"], url_path="stock/entrada")
    def stock_in(self, request, pk=None):
        query = StockQuantityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        product = services.stock_in(pk, query.validated_data["cantidad"])
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"], url_path="stock/salida")
    def stock_out(self, request, pk=None):
        query = StockQuantityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        product = services.stock_out(pk, query.validated_data["cantidad"])
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"])
    def alertas(self, request):
        return Response(ProductSerializer(services.low_stock_products(), many=True).data)

    @action(detail=False, methods=["get"])
    def search(self, request):
        query = NameSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(ProductSerializer(services.search_products_by_name(query.validated_data["nombre"]), many=True).data)

    @action(detail=False, methods=["get"])
    def precio(self, request):
        query = PriceRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        products = services.products_in_price_range(query.validated_data["min"], query.validated_data["max"])
        return Response(ProductSerializer(products, many=True).data)
