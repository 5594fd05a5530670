"""
Final answer stage.

Hands the aggregated tool output and the original query to the language
model and parses the structured answer it returns.
"""
import logging
from string import Template
from typing import List, Optional

from pydantic import ValidationError

from sui_agent.domains.errors import FinalAnswerParseError
from sui_agent.domains.pipeline import StructuredAnswer
from sui_agent.interfaces.providers.llm import LLMProvider
from sui_agent.interfaces.services.aggregator import (
    ResponseAggregatorService as ResponseAggregatorServiceInterface,
)
from sui_agent.services.parsing import completion_text, load_json

logger = logging.getLogger(__name__)

__all__ = ["FINAL_ANSWER_PROMPT", "parse_final_answer", "ResponseAggregatorService"]

FINAL_ANSWER_PROMPT = Template("""This is the user query: $query
This is the raw, unrefined response: $response
Tools used: $tools

Write down the response in this format:

[{
    "reasoning": string, // explain your reasoning in clear terms
    "response": string | JSON, // for transactions use the transaction format below, otherwise give clear, detailed information. IF THE RESPONSE IS JSON, RETURN IT AS A JSON OBJECT
    "status": "success" | "failure", // success if there are no errors
    "query": string, // the initial user query
    "errors": string[] // empty if there are none
}]

If the response contains a transaction (check for a digest or transaction details):
1. Always include the SuiVision link (https://suivision.xyz/txblock/{digest}, or https://testnet.suivision.xyz/txblock/{digest} on testnet)
2. Format amounts in human-readable form (e.g. "1 SUI" instead of "1000000000")
3. Use the emojis ✅ for success and ❌ for failure
4. Include all transaction details in a clear, readable format

Successful transaction:
Transaction successful! ✅
View on SuiVision: https://suivision.xyz/txblock/{digest}

Details:
- Amount: {amount} SUI
- From: {sender}
- To: {recipient}
- Network: {network}

Failed transaction:
Transaction failed ❌
{error_message}

Please check:
- You have enough SUI for transfer and gas
- The recipient address is correct
- Try again or use a smaller amount

DO NOT UNDER ANY CIRCUMSTANCES STRAY FROM THE RESPONSE FORMAT.
RESPOND WITH ONLY THE RESPONSE FORMAT.
""")


def parse_final_answer(text: str) -> List[StructuredAnswer]:
    """Parse the formatter's answer into structured answers.

    A single JSON object is accepted as a one-element array.

    Raises:
        FinalAnswerParseError: If the answer does not match the answer format
    """
    data = load_json(text, FinalAnswerParseError, "Final answer")
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not data:
        raise FinalAnswerParseError(
            "Final answer must be a non-empty array of answer objects",
            raw_output=text,
        )

    answers = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise FinalAnswerParseError(
                f"Answer {index} is {type(item).__name__}, expected an object",
                raw_output=text,
            )
        try:
            answers.append(StructuredAnswer.model_validate(item))
        except ValidationError as e:
            raise FinalAnswerParseError(
                f"Answer {index} is malformed: {e}", raw_output=text
            ) from e
    return answers


class ResponseAggregatorService(ResponseAggregatorServiceInterface):
    """Service for shaping raw tool output into the final answer."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        model: Optional[str] = None,
        prompt: Template = FINAL_ANSWER_PROMPT,
    ) -> None:
        self.llm_provider = llm_provider
        self.model = model
        self.prompt = prompt

    def build_prompt(self, response: str, query: str, tools: Optional[str] = None) -> str:
        # single pass, so placeholders inside tool output are left alone
        return self.prompt.safe_substitute(
            query=query, response=response, tools=tools or "none"
        )

    async def final_answer(
        self, response: str, query: str, tools: Optional[str] = None
    ) -> List[StructuredAnswer]:
        """Generate the structured answer for a query.

        Args:
            response: Newline-joined tool output, or a placeholder
            query: Original user query
            tools: Comma-joined names of the tools used

        Returns:
            Every answer object the model returned, in order
        """
        completion = await self.llm_provider.chat(
            [
                {"role": "system", "content": self.build_prompt(response, query, tools)},
                {"role": "user", "content": query},
            ],
            model=self.model,
        )
        text = completion_text(completion)
        logger.debug(f"Final answer raw output: {text}")

        answers = parse_final_answer(text)
        logger.info(f"Final answer status: {[a.status for a in answers]}")
        return answers
