"""DynamoDB tablo oluşturma ve örnek veri yükleme.

3 tablo: IsgCollections, IsgMarkers, AgentDecisions
"""
import boto3
import os
import sys
from botocore.exceptions import ClientError
from botocore.config import Config

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))
import env_loader  # noqa: F401

from isg_takip import config
from isg_takip.agents.compliance_monitor import ComplianceMonitorAgent
from isg_takip.models.isg import ComplianceData

REGION = config.REGION
BOTO_CONFIG = Config(retries={"max_attempts": 3})

TABLE_DEFINITIONS = [
    {
        "TableName": config.COLLECTIONS_TABLE,
        "KeySchema": [
            {"AttributeName": "collection", "KeyType": "HASH"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": "collection", "AttributeType": "S"},
        ],
        "BillingMode": "PAY_PER_REQUEST",
    },
    {
        "TableName": config.MARKERS_TABLE,
        "KeySchema": [
            {"AttributeName": "marker_key", "KeyType": "HASH"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": "marker_key", "AttributeType": "S"},
        ],
        "BillingMode": "PAY_PER_REQUEST",
    },
    {
        "TableName": config.DECISIONS_TABLE,
        "KeySchema": [
            {"AttributeName": "decision_id", "KeyType": "HASH"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": "decision_id", "AttributeType": "S"},
            {"AttributeName": "agent_name", "AttributeType": "S"},
            {"AttributeName": "timestamp", "AttributeType": "S"},
        ],
        "GlobalSecondaryIndexes": [
            {
                "IndexName": "AgentTimeIndex",
                "KeySchema": [
                    {"AttributeName": "agent_name", "KeyType": "HASH"},
                    {"AttributeName": "timestamp", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
        "BillingMode": "PAY_PER_REQUEST",
    },
]


def create_tables(region: str = REGION):
    """Tüm DynamoDB tablolarını oluşturur."""
    dynamodb = boto3.client("dynamodb", region_name=region, config=BOTO_CONFIG)

    for table_def in TABLE_DEFINITIONS:
        table_name = table_def["TableName"]
        try:
            dynamodb.describe_table(TableName=table_name)
            print(f"  ⏭️  {table_name} zaten mevcut, atlanıyor")
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                print(f"  🔨 {table_name} oluşturuluyor...")
                dynamodb.create_table(**table_def)
                # Tablonun aktif olmasını bekle
                waiter = dynamodb.get_waiter("table_exists")
                waiter.wait(TableName=table_name)
                print(f"  ✓  {table_name} oluşturuldu")
            else:
                raise


def _collections_have_data(region: str = REGION) -> bool:
    """Koleksiyon tablosunda veri var mı kontrol eder (hızlı scan, 1 item)."""
    dynamodb = boto3.client("dynamodb", region_name=region, config=BOTO_CONFIG)
    resp = dynamodb.scan(TableName=config.COLLECTIONS_TABLE, Limit=1, Select="COUNT")
    return resp.get("Count", 0) > 0


def load_sample_data(data: ComplianceData, region: str = REGION, force: bool = False):
    """Örnek koleksiyonları yükler (zaten doluysa atlar)."""
    print("\n📤 DynamoDB'ye veri yükleniyor...\n")
    if not force and _collections_have_data(region):
        print(f"  ⏭️  {config.COLLECTIONS_TABLE} zaten dolu, atlanıyor")
        return

    agent = ComplianceMonitorAgent(
        region_name=region,
        dynamodb_resource=boto3.resource("dynamodb", region_name=region, config=BOTO_CONFIG),
    )
    agent.save_data(data)
    print(f"  ✓  {len(data.firms)} firma, {len(data.employees)} personel yüklendi")
    print("\n✅ Tüm veriler DynamoDB'ye yüklendi!")


def delete_tables(region: str = REGION):
    """Tüm tabloları siler (dikkatli kullan)."""
    dynamodb = boto3.client("dynamodb", region_name=region, config=BOTO_CONFIG)
    for table_def in TABLE_DEFINITIONS:
        table_name = table_def["TableName"]
        try:
            dynamodb.delete_table(TableName=table_name)
            print(f"  🗑️  {table_name} silindi")
        except ClientError:
            print(f"  ⏭️  {table_name} bulunamadı, atlanıyor")


if __name__ == "__main__":
    from data_layer.generators.generators import generate_data

    if len(sys.argv) > 1 and sys.argv[1] == "--delete":
        print("🗑️  Tablolar siliniyor...")
        delete_tables()
    else:
        print("🏗️  DynamoDB tabloları oluşturuluyor...\n")
        create_tables()
        load_sample_data(generate_data())
