"""AWS altyapısını kurar ve örnek veriyi yükler.

Kullanım:
    python -m data_layer.scripts.setup_aws              # Kur ve yükle
    python -m data_layer.scripts.setup_aws --delete     # Her şeyi sil
    python -m data_layer.scripts.setup_aws --region eu-west-1  # Farklı region
    python -m data_layer.scripts.setup_aws --seed 7     # Farklı örnek veri
"""
import sys
import os

# Proje root'unu path'e ekle
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from isg_takip import config
from data_layer.generators.generators import generate_data
from data_layer.infrastructure.dynamodb_setup import create_tables, load_sample_data, delete_tables
from data_layer.infrastructure.s3_setup import create_bucket, delete_bucket


def main():
    region = config.REGION
    seed = 42
    delete_mode = False

    # Argümanları parse et
    args = sys.argv[1:]
    for i, arg in enumerate(args):
        if arg == "--delete":
            delete_mode = True
        elif arg == "--region" and i + 1 < len(args):
            region = args[i + 1]
        elif arg == "--seed" and i + 1 < len(args):
            seed = int(args[i + 1])

    if delete_mode:
        print("🗑️  AWS kaynakları siliniyor...\n")
        print("--- DynamoDB ---")
        delete_tables(region)
        print("\n--- S3 ---")
        delete_bucket(region)
        print("\n✅ Tüm kaynaklar silindi!")
        return

    print("=" * 60)
    print("🚀 AWS Altyapı Kurulumu - İSG Takip Sistemi")
    print(f"   Region: {region}")
    print("=" * 60)

    # 1. DynamoDB
    print("\n📊 ADIM 1: DynamoDB Tabloları")
    print("-" * 40)
    create_tables(region)

    # 2. S3
    print("\n📦 ADIM 2: S3 Bucket")
    print("-" * 40)
    bucket = create_bucket(region)

    # 3. Veri yükleme
    print("\n📤 ADIM 3: Örnek Veri")
    print("-" * 40)
    load_sample_data(generate_data(seed), region)

    print("\n" + "=" * 60)
    print("✅ AWS altyapısı hazır!")
    print("   DynamoDB: 3 tablo oluşturuldu ve veri yüklendi")
    print(f"   S3: {bucket} oluşturuldu (ISG_S3_BUCKET={bucket} ile karar logları açılır)")
    print(f"   Region: {region}")
    print("=" * 60)


if __name__ == "__main__":
    main()
