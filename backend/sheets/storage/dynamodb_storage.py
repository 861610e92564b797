"""
Async DynamoDB storage layer for sheets.

Table layout: partition key `name` (the sheet id); cells are stored as a
nested map in the `cells` attribute.
"""
import aioboto3
from typing import List, Mapping, Optional, Dict, Any
from sheets.models import Cell, Sheet
from sheets.core.config import settings
from .base import SheetStore, utc_now
from botocore.exceptions import ClientError


class DynamoDBStorage(SheetStore):
    """Serverless sheet storage using DynamoDB."""

    def __init__(self, table_name: str = None, region: str = None, session: aioboto3.Session = None):
        self.table_name = table_name or settings.DYNAMODB_TABLE_NAME
        self.region = region or settings.AWS_REGION
        self.session = session or aioboto3.Session()

        if not self.table_name:
            raise ValueError("DYNAMODB_TABLE_NAME not configured")

    async def load(self, sheet_id: str) -> Optional[Sheet]:
        async with self.session.resource('dynamodb', region_name=self.region) as dynamodb:
            table = await dynamodb.Table(self.table_name)

            response = await table.get_item(
                Key={'name': sheet_id},
                ConsistentRead=True  # Strong consistency for read-modify-write
            )

            if 'Item' not in response:
                return None

            return self._deserialize_sheet(response['Item'])

    async def save(self, sheet_id: str, cells: Mapping[str, Cell]) -> Sheet:
        """
        Replace the sheet item, preserving created_at if it already exists.
        """
        now = utc_now()
        sheet = Sheet(name=sheet_id, cells=dict(cells), updated_at=now)

        async with self.session.resource('dynamodb', region_name=self.region) as dynamodb:
            table = await dynamodb.Table(self.table_name)

            response = await table.get_item(
                Key={'name': sheet_id},
                ProjectionExpression='created_at'
            )
            sheet.created_at = response.get('Item', {}).get('created_at') or now

            await table.put_item(Item=sheet.to_dict())

        return sheet

    async def touch(self, sheet_id: str) -> Optional[Sheet]:
        async with self.session.resource('dynamodb', region_name=self.region) as dynamodb:
            table = await dynamodb.Table(self.table_name)

            try:
                response = await table.update_item(
                    Key={'name': sheet_id},
                    UpdateExpression='SET updated_at = :now',
                    ConditionExpression='attribute_exists(#n)',
                    ExpressionAttributeNames={'#n': 'name'},  # 'name' is a reserved word
                    ExpressionAttributeValues={':now': utc_now()},
                    ReturnValues='ALL_NEW'
                )
            except ClientError as e:
                if e.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException':
                    return None
                raise

            return self._deserialize_sheet(response['Attributes'])

    async def list_sheets(self) -> List[str]:
        names: List[str] = []
        async with self.session.resource('dynamodb', region_name=self.region) as dynamodb:
            table = await dynamodb.Table(self.table_name)

            scan_kwargs: Dict[str, Any] = {
                'ProjectionExpression': '#n',
                'ExpressionAttributeNames': {'#n': 'name'},
            }
            while True:
                response = await table.scan(**scan_kwargs)
                names.extend(item['name'] for item in response.get('Items', []))
                if 'LastEvaluatedKey' not in response:
                    break
                scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']

        return names

    def _deserialize_sheet(self, item: Dict[str, Any]) -> Sheet:
        """Convert DynamoDB item to Sheet object."""
        return Sheet.from_dict(item)
