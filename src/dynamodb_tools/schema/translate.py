from dynamodb_tools.errors import SchemaError
from dynamodb_tools.schema.table import TableAttr, TableGsi, TableInfo, TableLsi, Throughput

HASH = "HASH"
RANGE = "RANGE"
PAY_PER_REQUEST = "PAY_PER_REQUEST"


def key_schema(pk: TableAttr, sk: TableAttr | None = None) -> list[dict]:
    schema = [{"AttributeName": pk.name, "KeyType": HASH}]
    if sk is not None:
        schema.append({"AttributeName": sk.name, "KeyType": RANGE})
    return schema


def attribute_definition(attr: TableAttr) -> dict:
    return {"AttributeName": attr.name, "AttributeType": attr.attr_type.value}


def provisioned_throughput(throughput: Throughput) -> dict:
    return {
        "ReadCapacityUnits": throughput.read,
        "WriteCapacityUnits": throughput.write,
    }


def projection(attrs: list[str]) -> dict:
    """Project the listed attributes, or everything when none are listed."""
    if not attrs:
        return {"ProjectionType": "ALL"}
    return {"ProjectionType": "INCLUDE", "NonKeyAttributes": list(attrs)}


def global_secondary_index(gsi: TableGsi) -> dict:
    index = {
        "IndexName": gsi.name,
        "KeySchema": key_schema(gsi.pk, gsi.sk),
        "Projection": projection(gsi.attrs),
    }
    if gsi.throughput is not None:
        index["ProvisionedThroughput"] = provisioned_throughput(gsi.throughput)
    return index


def local_secondary_index(lsi: TableLsi) -> dict:
    return {
        "IndexName": lsi.name,
        "KeySchema": key_schema(lsi.pk, lsi.sk),
        "Projection": projection(lsi.attrs),
    }


def attribute_definitions(info: TableInfo) -> list[dict]:
    """Declared attrs followed by the table keys, one definition per name."""
    declared = [*info.attrs, info.pk]
    if info.sk is not None:
        declared.append(info.sk)

    seen: dict[str, TableAttr] = {}
    for attr in declared:
        previous = seen.get(attr.name)
        if previous is None:
            seen[attr.name] = attr
        elif previous.attr_type != attr.attr_type:
            raise SchemaError(
                f"attribute '{attr.name}' declared as both "
                f"{previous.attr_type.value} and {attr.attr_type.value}"
            )
    return [attribute_definition(attr) for attr in seen.values()]


def create_table_input(info: TableInfo, table_name: str | None = None) -> dict:
    """
    Translate a table definition into keyword arguments for
    ``client.create_table``. ``table_name`` overrides ``info.table_name``.
    """
    for lsi in info.lsis:
        if lsi.pk.name != info.pk.name:
            raise SchemaError(
                f"local secondary index '{lsi.name}' must use the table partition key "
                f"'{info.pk.name}', not '{lsi.pk.name}'"
            )

    request: dict = {
        "TableName": table_name or info.table_name,
        "KeySchema": key_schema(info.pk, info.sk),
        "AttributeDefinitions": attribute_definitions(info),
    }

    # DynamoDB rejects empty index lists, so only send the ones that exist
    if info.gsis:
        request["GlobalSecondaryIndexes"] = [global_secondary_index(g) for g in info.gsis]
    if info.lsis:
        request["LocalSecondaryIndexes"] = [local_secondary_index(lsi) for lsi in info.lsis]

    if info.throughput is not None:
        request["ProvisionedThroughput"] = provisioned_throughput(info.throughput)
    else:
        request["BillingMode"] = PAY_PER_REQUEST

    return request
