"""Print a year-by-year SIP projection or the SIP needed for a goal."""

from __future__ import annotations

import argparse

from nivesh_advisor.sip import project_sip, solve_sip_for_target


def main() -> None:
    parser = argparse.ArgumentParser(description="Project a SIP or solve for a target corpus")
    parser.add_argument("--amount", type=float, help="Monthly contribution")
    parser.add_argument("--target", type=float, help="Target corpus; solves for the monthly amount")
    parser.add_argument("--rate", type=float, default=12.0, help="Expected annual return in %%")
    parser.add_argument("--years", type=int, default=10)
    parser.add_argument("--step-up", type=float, default=0.0, help="Annual step-up in %%")
    parser.add_argument("--inflation", type=float, default=0.0, help="Annual inflation in %%")
    parser.add_argument("--tax", action="store_true", help="Apply long-term capital gains tax")
    args = parser.parse_args()

    if args.amount is None and args.target is None:
        parser.error("pass --amount or --target")

    amount = args.amount
    if args.target is not None:
        amount = solve_sip_for_target(args.target, args.rate, args.years, args.step_up)
        print(f"Required monthly SIP for {args.target:,.0f}: {amount:,.0f}")

    result = project_sip(amount, args.rate, args.years, args.step_up, args.inflation, args.tax)
    print(f"{'year':>4}{'sip':>12}{'invested':>14}{'value':>14}{'returns':>14}{'real value':>14}")
    for entry in result.yearly_breakdown:
        print(
            f"{entry.year:>4}{entry.sip_amount:>12,}{entry.invested:>14,}{entry.value:>14,}"
            f"{entry.returns:>14,}{entry.inflation_adjusted:>14,}"
        )
    print(f"Future value: {result.future_value:,}  Invested: {result.total_invested:,.0f}")
    if args.tax:
        print(f"Taxable gains: {result.taxable_gains:,}  Post-tax value: {result.post_tax_value:,}")


if __name__ == "__main__":
    main()
