"""Tüm agentlar için temel sınıf - DynamoDB ve S3 entegrasyonu."""

from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from isg_takip import config
from isg_takip.models.isg import AgentDecision

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """AWS tabanlı agent temel sınıfı."""

    def __init__(
        self,
        agent_name: str,
        region_name: str = config.REGION,
        dynamodb_resource: Optional[Any] = None,
        s3_client: Optional[Any] = None,
        s3_bucket: Optional[str] = None,
    ):
        self.agent_name = agent_name
        self.region_name = region_name

        # AWS istemcileri - dependency injection destekli
        self.dynamodb = dynamodb_resource or boto3.resource(
            "dynamodb", region_name=region_name
        )
        self.s3 = s3_client or boto3.client("s3", region_name=region_name)
        self.s3_bucket = config.S3_BUCKET if s3_bucket is None else s3_bucket

        # Tablo referansları
        self.collections_table = self.dynamodb.Table(config.COLLECTIONS_TABLE)
        self.markers_table = self.dynamodb.Table(config.MARKERS_TABLE)
        self.decisions_table = self.dynamodb.Table(config.DECISIONS_TABLE)

        self._decisions: list[AgentDecision] = []

        logger.info("Agent başlatıldı: %s (region: %s)", agent_name, region_name)

    def log_decision(
        self,
        decision_type: str,
        input_data: dict,
        output_data: dict,
        reasoning: str,
    ) -> AgentDecision:
        """Agent kararını loglar ve DynamoDB'ye kaydeder."""
        decision = AgentDecision(
            decision_id=str(uuid.uuid4()),
            agent_name=self.agent_name,
            decision_type=decision_type,
            input_data=input_data,
            output_data=output_data,
            reasoning=reasoning,
        )
        self._decisions.append(decision)

        try:
            self.decisions_table.put_item(
                Item={
                    "decision_id": decision.decision_id,
                    "agent_name": decision.agent_name,
                    "decision_type": decision.decision_type,
                    "input_data": json.dumps(input_data, ensure_ascii=False),
                    "output_data": json.dumps(output_data, ensure_ascii=False),
                    "reasoning": reasoning,
                    "timestamp": decision.timestamp,
                }
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning("Karar loglama hatası: %s", e)

        if self.s3_bucket:
            self.log_to_s3({
                "decision_id": decision.decision_id,
                "agent_name": decision.agent_name,
                "decision_type": decision_type,
                "input_data": input_data,
                "output_data": output_data,
                "reasoning": reasoning,
                "timestamp": decision.timestamp,
            }, prefix=f"{decision_type}-")

        return decision

    def log_to_s3(self, log_data: dict, prefix: str = "") -> None:
        """Agent logunu S3'e kaydeder."""
        timestamp = datetime.utcnow().strftime("%Y-%m-%dT%H-%M-%S")
        key = f"agent-logs/{self.agent_name.lower().replace(' ', '-')}/{prefix}{timestamp}.json"
        try:
            self.s3.put_object(
                Bucket=self.s3_bucket,
                Key=key,
                Body=json.dumps(log_data, default=str, ensure_ascii=False),
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning("S3 log hatası: %s", e)

    def get_decisions(self) -> list[AgentDecision]:
        return list(self._decisions)

    @abstractmethod
    def process(self, *args: Any, **kwargs: Any) -> Any:
        """Her agent kendi iş mantığını implement eder."""
        ...
