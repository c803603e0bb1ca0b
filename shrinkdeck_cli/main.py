"""
Shrinkdeck CLI - Terminal-based game interface
"""

import argparse
import os
import random
import sys

from colorama import init, Fore, Style

from shrinkdeck_core import (
    Card,
    GamePhase,
    PlayCard,
    StartGame,
    SubmitBet,
    apply_action,
    create_game,
    join_game,
    valid_moves,
)
from shrinkdeck_core.errors import GameError

from .bots import choose_action

# Initialize colorama
init(autoreset=True)

SUITS_DISPLAY = {
    'C': f'{Fore.GREEN}♣{Style.RESET_ALL}',
    'D': f'{Fore.RED}♦{Style.RESET_ALL}',
    'H': f'{Fore.RED}♥{Style.RESET_ALL}',
    'S': f'{Fore.GREEN}♠{Style.RESET_ALL}',
}


class ShrinkdeckCLI:
    def __init__(self, num_players: int = 4, initial_cards: int = 7, seed=None, auto: bool = False):
        self.num_players = num_players
        self.initial_cards = initial_cards
        self.rng = random.Random(seed)
        self.auto = auto
        self.state = None
        self.human_id = None

    def clear_screen(self):
        if not self.auto:
            os.system('clear' if os.name != 'nt' else 'cls')

    def print_banner(self):
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}                 🃏 SHRINKING DECK 🃏{Style.RESET_ALL}")
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}\n")

    def format_card(self, card: Card) -> str:
        """Format a card for display"""
        suit_symbol = SUITS_DISPLAY.get(card.suit.value, card.suit.value)
        return f"{card.rank}{suit_symbol}"

    def display_scoreboard(self):
        """Display current scores"""
        print(f"\n{Fore.YELLOW}╔═══════════ SCOREBOARD ═══════════╗{Style.RESET_ALL}")
        for player in self.state.players:
            bet = "-" if player.current_bet is None else player.current_bet
            print(f"{Fore.CYAN}  {player.name:<12} score {player.score:4d}  bet {bet}  won {player.tricks_won}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}╚═══════════════════════════════════╝{Style.RESET_ALL}\n")

    def display_game_state(self):
        """Display current game state"""
        state = self.state
        rnd = state.round
        human = state.get_player(self.human_id)

        self.clear_screen()
        self.print_banner()
        self.display_scoreboard()

        print(f"{Fore.MAGENTA}Phase: {state.status.value}{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Round: {rnd.number}/{rnd.total_rounds}  ({rnd.cards_per_player} cards, {len(state.deck)} in play){Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Dealer: {state.players[rnd.dealer_index].name}{Style.RESET_ALL}")
        print(f"{Fore.GREEN}Trump: {SUITS_DISPLAY[rnd.trump_suit.value]}{Style.RESET_ALL}\n")

        trick = state.play.trick
        if trick.plays:
            print(f"{Fore.YELLOW}Current Trick:{Style.RESET_ALL}")
            for player_id, card in trick.plays:
                print(f"  {state.get_player(player_id).name}: {self.format_card(card)}")
            print()

        print(f"{Fore.CYAN}Your Hand:{Style.RESET_ALL}")
        hand_str = "  ".join(f"[{i}] {self.format_card(card)}" for i, card in enumerate(human.hand))
        print(f"  {hand_str}\n")

    def setup_game(self):
        """Setup a new game"""
        self.state = create_game("You")
        self.human_id = self.state.players[0].id
        for i in range(1, self.num_players):
            self.state, _ = join_game(self.state, f"Bot {i}")

        self.state = apply_action(
            self.state, StartGame(self.human_id, self.initial_cards), rng=self.rng
        )

    def handle_bet(self):
        """Ask the human for a bid until one is accepted"""
        moves = valid_moves(self.state, self.human_id)
        hint = ""
        if moves["forbiddenBet"] is not None:
            hint = f" (dealer may not bid {moves['forbiddenBet']})"

        while True:
            choice = input(f"Your bid 0-{moves['maxBet']}{hint}: ").strip()
            try:
                action = SubmitBet(self.human_id, int(choice))
                self.state = apply_action(self.state, action, rng=self.rng)
                return
            except ValueError:
                print(f"{Fore.RED}Invalid input. Enter a number.{Style.RESET_ALL}")
            except GameError as e:
                print(f"{Fore.RED}{e.message}{Style.RESET_ALL}")

    def handle_play_card(self):
        """Ask the human for a card until a legal one is played"""
        human = self.state.get_player(self.human_id)

        while True:
            choice = input(f"Card number (0-{len(human.hand) - 1}): ").strip()
            try:
                index = int(choice)
                if index < 0:
                    raise IndexError(index)
                card = human.hand[index]
                self.state = apply_action(self.state, PlayCard(self.human_id, card.id), rng=self.rng)
                print(f"\n{Fore.GREEN}You played: {self.format_card(card)}{Style.RESET_ALL}")
                return
            except (ValueError, IndexError):
                print(f"{Fore.RED}Invalid input. Enter a card number.{Style.RESET_ALL}")
            except GameError as e:
                print(f"{Fore.RED}{e.message}{Style.RESET_ALL}")

    def bot_turn(self):
        current = self.state.get_current_player()
        action = choose_action(self.state, current.id, self.rng)
        self.state = apply_action(self.state, action, rng=self.rng)
        if isinstance(action, SubmitBet):
            print(f"{current.name} bids {action.bet}")
        else:
            print(f"{current.name} plays {self.format_card(Card.from_id(action.card_id))}")

    def display_final_scores(self):
        print(f"\n{Fore.MAGENTA}GAME OVER!{Style.RESET_ALL}")
        ranking = sorted(self.state.players, key=lambda p: p.score, reverse=True)
        for place, player in enumerate(ranking, start=1):
            print(f"  {place}. {player.name:<12} {player.score}")

    def run(self):
        """Main game loop"""
        self.setup_game()
        human_seat = None if self.auto else self.human_id

        while self.state.status != GamePhase.FINISHED:
            current = self.state.get_current_player()

            if current.id != human_seat:
                self.bot_turn()
                continue

            self.display_game_state()
            if self.state.status == GamePhase.BETTING:
                self.handle_bet()
            else:
                self.handle_play_card()

        self.display_final_scores()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a local shrinking-deck match against bots")
    parser.add_argument("--players", type=int, default=4, help="Seats at the table, including you")
    parser.add_argument("--cards", type=int, default=7, help="Cards dealt per player in round 1")
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffles and bots")
    parser.add_argument("--auto", action="store_true", help="Let bots play every seat")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    cli = ShrinkdeckCLI(args.players, args.cards, seed=args.seed, auto=args.auto)
    try:
        cli.run()
    except KeyboardInterrupt:
        print(f"\n\n{Fore.YELLOW}Game interrupted. Thanks for playing!{Style.RESET_ALL}")
        sys.exit(0)
    except GameError as e:
        print(f"\n{Fore.RED}Error: {e.message}{Style.RESET_ALL}")
        sys.exit(1)


if __name__ == "__main__":
    main()
